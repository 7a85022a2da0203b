from __future__ import annotations

import threading
import uuid
from collections.abc import Callable, Iterator
from datetime import datetime, timezone

from todostate.logging_utils import logger
from todostate.models import SeedFile, Todo

Observer = Callable[[], None]


def _new_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TodoStore:
    """
    Owns the ordered collection of todos.

    The collection is an immutable tuple that gets swapped out whole on every change,
    so anything handed out by the read accessors is a stable snapshot. Observers are
    called synchronously, with no arguments, after each change and pull what they
    need from the accessors.

    Invalid input (unknown id, empty title) is a silent no-op, never an exception.

    Every id ever issued is remembered so none is handed out twice. That set only
    grows, for as long as the store lives.
    """

    def __init__(
        self, *, id_factory: Callable[[], str] = _new_id, clock: Callable[[], datetime] = _utc_now
    ) -> None:
        self._todos: tuple[Todo, ...] = ()
        self._observers: list[Observer] = []
        self._id_factory = id_factory
        self._clock = clock
        self._used_ids: set[str] = set()
        # Reentrant so an observer may mutate the store it is observing
        self._lock = threading.RLock()
        self._batch_depth = 0
        self._batch_dirty = False

    # Observers

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register a change callback. Returns a function that removes it again."""
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def _commit(self, todos: tuple[Todo, ...]) -> None:
        self._todos = todos
        if self._batch_depth:
            self._batch_dirty = True
            return
        self._notify()

    def _notify(self) -> None:
        # Copy, observers may unsubscribe while being notified
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            observer()

    @property
    def lock(self) -> threading.RLock:
        """Held by every mutation. Hold it to make a lookup and a change atomic."""
        return self._lock

    # Mutations

    def add_todo(self, title: str, description: str = "") -> Todo | None:
        title = title.strip()
        if not title:
            return None

        with self._lock:
            todo_id = self._id_factory()
            # ids are never reused, not even after a delete
            while todo_id in self._used_ids:
                todo_id = self._id_factory()
            self._used_ids.add(todo_id)

            todo = Todo(id=todo_id, title=title, description=description, created_at=self._clock())
            logger.debug(f"Added todo {todo.id}: {todo.title}")
            self._commit((*self._todos, todo))
        return todo

    def toggle_todo(self, todo_id: str) -> Todo | None:
        with self._lock:
            current = self.get_todo(todo_id)
            if current is None:
                return None

            toggled = current.model_copy(update={"is_completed": not current.is_completed})
            logger.debug(f"Toggled todo {todo_id}: completed={toggled.is_completed}")
            self._commit(self._replace(toggled))
        return toggled

    def update_todo(self, todo_id: str, new_title: str, new_description: str) -> Todo | None:
        """
        Replace title and description of a todo, keeping completion state and creation time.

        Empty titles are rejected here the same way `add_todo` rejects them.
        """
        new_title = new_title.strip()
        if not new_title:
            return None

        with self._lock:
            current = self.get_todo(todo_id)
            if current is None:
                return None

            new_description = new_description.strip()
            if (new_title, new_description) == (current.title, current.description):
                return current

            updated = current.model_copy(update={"title": new_title, "description": new_description})

            logger.debug(f"Updated todo {todo_id}: {updated.title}")
            self._commit(self._replace(updated))
        return updated

    def delete_todo(self, todo_id: str) -> bool:
        with self._lock:
            remaining = tuple(todo for todo in self._todos if todo.id != todo_id)
            if len(remaining) == len(self._todos):
                return False

            logger.debug(f"Deleted todo {todo_id}")
            self._commit(remaining)
        return True

    def clear_completed(self) -> int:
        """Remove every completed todo. Returns how many were removed."""
        with self._lock:
            pending = self.pending_todos
            removed = len(self._todos) - len(pending)
            if removed:
                logger.debug(f"Cleared {removed} completed todos")
                self._commit(pending)
        return removed

    def clear_all(self) -> int:
        with self._lock:
            removed = len(self._todos)
            if removed:
                logger.debug(f"Cleared all {removed} todos")
                self._commit(())
        return removed

    def seed(self, seed_file: SeedFile) -> list[Todo]:
        """Add every entry of a seed file, notifying observers once at the end"""
        added = []
        with self._lock:
            self._batch_depth += 1
            try:
                for entry in seed_file.todos:
                    todo = self.add_todo(entry.title, entry.description)
                    if todo is None:
                        continue
                    if entry.completed:
                        todo = self.toggle_todo(todo.id)
                    added.append(todo)
            finally:
                self._batch_depth -= 1

            dirty, self._batch_dirty = self._batch_dirty, False
        if dirty:
            self._notify()
        return added

    def _replace(self, replacement: Todo) -> tuple[Todo, ...]:
        return tuple(replacement if todo.id == replacement.id else todo for todo in self._todos)

    # Read accessors

    def get_todo(self, todo_id: str) -> Todo | None:
        for todo in self._todos:
            if todo.id == todo_id:
                return todo
        return None

    @property
    def todos(self) -> tuple[Todo, ...]:
        return self._todos

    @property
    def pending_todos(self) -> tuple[Todo, ...]:
        return tuple(todo for todo in self._todos if not todo.is_completed)

    @property
    def completed_todos(self) -> tuple[Todo, ...]:
        return tuple(todo for todo in self._todos if todo.is_completed)

    @property
    def total_count(self) -> int:
        return len(self._todos)

    @property
    def pending_count(self) -> int:
        return len(self.pending_todos)

    @property
    def completed_count(self) -> int:
        return len(self.completed_todos)

    def __len__(self) -> int:
        return len(self._todos)

    def __iter__(self) -> Iterator[Todo]:
        return iter(self._todos)

from __future__ import annotations

from collections.abc import Sequence

from todostate.models import Todo
from todostate.store import TodoStore


def format_todos(todos: Sequence[Todo]) -> str:
    """Numbered listing, positions start at 1"""
    if not todos:
        return "No todos yet."

    lines = []
    for i, todo in enumerate(todos, 1):
        status = "✓" if todo.is_completed else "○"
        lines.append(f"{i}. {status} {todo.title}")
        if todo.description:
            lines.append(f"   {todo.description}")
    return "\n".join(lines)


def format_stats(store: TodoStore) -> str:
    return f"Pending: {store.pending_count} | Completed: {store.completed_count}"


def todo_at(store: TodoStore, position: int) -> Todo | None:
    """Todo at a 1-based position of the full listing, None when out of range"""
    if position < 1 or position > store.total_count:
        return None
    return store.todos[position - 1]

from pydantic_ai.toolsets.function import FunctionToolset

from todostate.logging_utils import logger
from todostate.render import format_stats, format_todos, todo_at
from todostate.store import TodoStore


def todo_toolset(store: TodoStore) -> FunctionToolset:
    """
    Expose a store as agent tools.

    The store is passed in, so an agent and a CLI session can share one. Todos are
    addressed by their position in `list_todos`, which is what a model actually sees.
    """

    def add_todo(title: str, description: str = "") -> str:
        todo = store.add_todo(title, description)
        if todo is None:
            return "Rejected: title is empty"
        logger.info(f"Added task: {todo.title}")
        return f"Added: {todo.title}"

    def toggle_todo(position: int) -> str:
        with store.lock:
            todo = todo_at(store, position)
            toggled = store.toggle_todo(todo.id) if todo is not None else None
        if toggled is None:
            return f"Not found: {position}"
        state = "completed" if toggled.is_completed else "pending"
        return f"Marked {state}: {toggled.title}"

    def update_todo(position: int, title: str, description: str = "") -> str:
        with store.lock:
            todo = todo_at(store, position)
            if todo is None or store.get_todo(todo.id) is None:
                return f"Not found: {position}"
            updated = store.update_todo(todo.id, title, description)
        if updated is None:
            return "Rejected: title is empty"
        return f"Updated: {updated.title}"

    def delete_todo(position: int) -> str:
        with store.lock:
            todo = todo_at(store, position)
            if todo is None or not store.delete_todo(todo.id):
                return f"Not found: {position}"
        logger.info(f"Deleted task: {todo.title}")
        return f"Deleted: {todo.title}"

    def clear_completed() -> str:
        return f"Cleared {store.clear_completed()} completed todos"

    def list_todos() -> str:
        return f"{format_todos(store.todos)}\n{format_stats(store)}"

    return FunctionToolset(tools=[add_todo, toggle_todo, update_todo, delete_todo, clear_completed, list_todos])

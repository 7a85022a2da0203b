from __future__ import annotations

from pathlib import Path

import click
from pydantic_settings import BaseSettings
from pydantic_settings.main import SettingsConfigDict

from todostate.logging_utils import logger, parse_log_level, set_level
from todostate.models import SeedFile
from todostate.render import format_stats, format_todos, todo_at
from todostate.store import TodoStore

HELP_TEXT = """Commands:
  add <title> [| <description>]      Add a todo
  toggle <n>                         Toggle todo n between pending and completed
  edit <n> <title> [| <description>] Change title and description of todo n
  delete <n>                         Delete todo n
  clear-completed                    Delete all completed todos
  clear-all                          Delete every todo
  list                               Show all todos
  stats                              Show pending and completed counts
  help                               Show this help
  quit                               Leave"""


class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"

    TODO_SEED_FILE: Path | None = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def _split_text(text: str) -> tuple[str, str]:
    """`title | description` into its two halves, description optional"""
    title, _, description = text.partition("|")
    return title, description


def _position(arg: str, store: TodoStore) -> str | None:
    """Resolve a 1-based position argument to a todo id"""
    try:
        position = int(arg)
    except ValueError:
        click.echo(f"Not a number: {arg}")
        return None

    todo = todo_at(store, position)
    if todo is None:
        click.echo(f"No todo at position {position}.")
        return None
    return todo.id


def handle_command(store: TodoStore, line: str) -> bool:
    """
    Run one command line against the store.

    Returns False once the session should end. Output from successful changes
    comes from the store observer, not from here.
    """
    command, _, rest = line.strip().partition(" ")
    rest = rest.strip()

    match command:
        case "":
            pass
        case "add":
            title, description = _split_text(rest)
            if store.add_todo(title, description) is None:
                click.echo("A todo needs a title.")
        case "toggle":
            if (todo_id := _position(rest, store)) is not None:
                store.toggle_todo(todo_id)
        case "edit":
            arg, _, text = rest.partition(" ")
            if (todo_id := _position(arg, store)) is not None:
                title, description = _split_text(text)
                if store.update_todo(todo_id, title, description) is None:
                    click.echo("A todo needs a title.")
        case "delete":
            if (todo_id := _position(rest, store)) is not None:
                if click.confirm(f"Delete '{store.get_todo(todo_id).title}'?", default=False):
                    store.delete_todo(todo_id)
        case "clear-completed":
            if not store.clear_completed():
                click.echo("Nothing to clear.")
        case "clear-all":
            if store.total_count and click.confirm("Delete every todo?", default=False):
                store.clear_all()
        case "list":
            click.echo(format_todos(store.todos))
        case "stats":
            click.echo(format_stats(store))
        case "help":
            click.echo(HELP_TEXT)
        case "quit" | "exit":
            return False
        case _:
            click.echo(f"Unknown command: {command}. Type `help` for a list of commands.")
    return True


def _render(store: TodoStore) -> None:
    click.echo(format_todos(store.todos))
    if store.total_count:
        click.echo(format_stats(store))


def run_session(store: TodoStore) -> None:
    """Read commands until `quit` or end of input, re-rendering after every change"""
    unsubscribe = store.subscribe(lambda: _render(store))
    try:
        _render(store)
        while True:
            try:
                line = click.prompt("todo", default="", show_default=False, prompt_suffix="> ")
            except click.Abort:
                # End of input
                click.echo()
                break
            if not handle_command(store, line):
                break
    finally:
        unsubscribe()


@click.command(help="Manage a todo list in the terminal.")
@click.option(
    "--seed",
    "seed_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with todos to start with. Defaults to TODO_SEED_FILE.",
)
@click.option("--log-level", default=None, help="debug, info, warning or error. Defaults to LOG_LEVEL.")
def cli(seed_path: Path | None, log_level: str | None) -> None:
    """
    Start an interactive todo session

    Usage:
        uv run todo
        uv run todo --seed todos.yml

        LOG_LEVEL=debug uv run todo # Enable debug logging
    """
    settings = Settings()

    try:
        set_level(parse_log_level(log_level or settings.LOG_LEVEL), logger=logger)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level") from e

    store = TodoStore()

    seed_path = seed_path or settings.TODO_SEED_FILE
    if seed_path is not None:
        try:
            seed_file = SeedFile.from_file(seed_path)
        except AssertionError as e:
            raise click.BadParameter(str(e), param_hint="--seed") from e
        store.seed(seed_file)
        logger.info(f"Seeded {store.total_count} todos from {seed_path}.")

    run_session(store)


if __name__ == "__main__":
    cli()

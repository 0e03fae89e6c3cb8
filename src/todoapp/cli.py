"""CLI interface for todoapp."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from todoapp import __version__
from todoapp.config import TodoConfig
from todoapp.errors import FormatError, TitleValidationError
from todoapp.logging_setup import setup_logging
from todoapp.models import Task, display_order
from todoapp.store import TaskStore

console = Console()
logger = logging.getLogger(__name__)

MENU = "[A]dd  [T]oggle  [D]elete  [Q]uit"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="todoapp")
@click.option(
    "--file",
    "-f",
    "data_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Task file to use (default: To-Do-List.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, data_file: Path | None, verbose: bool) -> None:
    """todoapp - a small task tracker that keeps its list in a JSON file.

    \b
    Run without a command for the interactive menu:
      todoapp                 # [A]dd  [T]oggle  [D]elete  [Q]uit

    \b
    Or use one-shot commands:
      todoapp add "Buy milk"
      todoapp toggle 1
      todoapp delete 1
      todoapp list
    """
    config = TodoConfig.load()
    setup_logging(
        logging.DEBUG if verbose else config.log_level,
        log_file=config.log_file,
    )

    store = TaskStore(data_file or config.data_path)
    try:
        store.load()
    except FormatError as e:
        console.print(f"[red]Could not read task file:[/red] {escape(str(e))}")
        console.print("[dim]Fix or move the file and try again; it was left untouched.[/dim]")
        ctx.exit(1)
    except OSError as e:
        console.print(f"[red]Could not open task file:[/red] {escape(str(e))}")
        ctx.exit(1)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["store"] = store

    if ctx.invoked_subcommand is None:
        run_menu(store)


@main.command("list")
@click.pass_context
def list_command(ctx: click.Context) -> None:
    """Show all tasks, open ones first."""
    store: TaskStore = ctx.obj["store"]

    if not store.tasks:
        console.print("[dim]No items yet.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Done", justify="center")
    table.add_column("Title")
    table.add_column("Created", style="dim")
    table.add_column("Completed", style="dim")

    for task in display_order(store.tasks):
        table.add_row(
            str(task.id),
            "[green]✓[/green]" if task.is_done else "",
            escape(task.title),
            _format_time(task.created_at),
            _format_time(task.completed_at) if task.completed_at else "",
        )

    console.print(table)


@main.command("add")
@click.argument("title")
@click.pass_context
def add_command(ctx: click.Context, title: str) -> None:
    """Add a task with the given TITLE."""
    store: TaskStore = ctx.obj["store"]

    try:
        task = store.add(title)
    except TitleValidationError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        ctx.exit(1)
    except OSError as e:
        console.print(f"[red]Could not save task file:[/red] {escape(str(e))}")
        ctx.exit(1)

    console.print(f"[green]Added #{task.id}:[/green] {escape(task.title)}")


@main.command("toggle")
@click.argument("task_id", type=int)
@click.pass_context
def toggle_command(ctx: click.Context, task_id: int) -> None:
    """Mark task TASK_ID done, or not done if it already is."""
    store: TaskStore = ctx.obj["store"]

    try:
        toggled = store.toggle(task_id)
    except OSError as e:
        console.print(f"[red]Could not save task file:[/red] {escape(str(e))}")
        ctx.exit(1)

    if not toggled:
        console.print(f"[red]No item with id {task_id}.[/red]")
        ctx.exit(1)

    task = store.get(task_id)
    state = "done" if task is not None and task.is_done else "not done"
    console.print(f"[green]Toggled item #{task_id}[/green] ({state}).")


@main.command("delete")
@click.argument("task_id", type=int)
@click.pass_context
def delete_command(ctx: click.Context, task_id: int) -> None:
    """Delete task TASK_ID."""
    store: TaskStore = ctx.obj["store"]

    try:
        deleted = store.delete(task_id)
    except OSError as e:
        console.print(f"[red]Could not save task file:[/red] {escape(str(e))}")
        ctx.exit(1)

    if not deleted:
        console.print(f"[red]No item with id {task_id}.[/red]")
        ctx.exit(1)

    console.print(f"[green]Deleted item #{task_id}.[/green]")


def run_menu(store: TaskStore) -> None:
    """Interactive single-key menu loop.

    Returns after the user quits; the store is saved on the way out.
    End of input is treated like quitting.
    """
    while True:
        console.clear()
        console.print(f"[bold]ToDo App (v{__version__})[/bold]")
        console.print()
        print_items(store.tasks)
        console.print()
        console.print(escape(MENU))
        console.print("> ", end="")

        try:
            key = click.getchar()
        except EOFError:
            key = ""
        console.print()

        choice = key.lower()
        if choice in ("q", ""):
            store.save()
            console.print("Saved. Bye!")
            return

        try:
            if choice == "a":
                _add_item(store)
            elif choice == "t":
                _toggle_item(store)
            elif choice == "d":
                _delete_item(store)
            else:
                _pause("Unknown option.")
        except OSError as e:
            logger.error("Saving %s failed: %s", store.path, e)
            _pause(f"Could not save task file: {e}")


def print_items(tasks: list[Task]) -> None:
    """Print tasks in display order, one per line."""
    if not tasks:
        console.print("No items yet. Press 'A' to add one.")
        return

    for task in display_order(tasks):
        console.print(escape(str(task)), highlight=False)


def _add_item(store: TaskStore) -> None:
    title = click.prompt("Enter title", default="", show_default=False)

    if not title.strip():
        _pause("Title cannot be empty.")
        return

    task = store.add(title)
    _pause(f"Added #{task.id}: {task.title}")


def _toggle_item(store: TaskStore) -> None:
    task_id = _prompt_id("Enter id to toggle")
    if task_id is None:
        return

    if store.toggle(task_id):
        _pause(f"Toggled item #{task_id}.")
    else:
        _pause(f"No item with id {task_id}.")


def _delete_item(store: TaskStore) -> None:
    task_id = _prompt_id("Enter id to delete")
    if task_id is None:
        return

    if store.delete(task_id):
        _pause(f"Deleted item #{task_id}.")
    else:
        _pause(f"No item with id {task_id}.")


def _prompt_id(text: str) -> int | None:
    """Ask for a task id; reports and returns None if it is not a number."""
    raw = click.prompt(text, default="", show_default=False)
    try:
        return int(raw.strip())
    except ValueError:
        _pause("Please enter a valid number.")
        return None


def _pause(message: str) -> None:
    """Show a message and wait for a key press."""
    console.print(escape(message), highlight=False)
    console.print("Press any key to continue...")
    click.getchar()


def _format_time(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M")


if __name__ == "__main__":
    main()

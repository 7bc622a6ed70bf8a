"""Tasklist CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import Config
from .errors import TaskIndexError
from .state.session import TaskSession
from .state.tasks import Task
from .state.view import TaskFilter
from .utils.logger import setup_logging

FILTER_CHOICES = [f.value for f in TaskFilter]


def _format_task(position: int, task: Task) -> str:
    mark = "x" if task.completed else " "
    due = task.due_date or "No Due Date"
    return f"{position:>3}. [{mark}] {task.text}  ({due})"


def _session(ctx: click.Context) -> TaskSession:
    return ctx.ensure_object(dict)["session"]


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Task store file (default: storage.path from config)",
)
@click.pass_context
def main(ctx: click.Context, store_path: Optional[Path]) -> None:
    """Tasklist - ordered task list with due dates."""
    config = Config()
    interactive = ctx.invoked_subcommand in (None, "tui")
    # The TUI owns the terminal; log to the file only.
    setup_logging(config.get("general.log_level", "warning"), config.log_file, console=not interactive)
    try:
        default_filter = TaskFilter.coerce(config.get("view.default_filter", "all"))
    except ValueError as exc:
        click.echo(f"Ignoring view.default_filter: {exc}", err=True)
        default_filter = TaskFilter.ALL

    session = TaskSession.from_path(store_path or config.storage_path, default_filter=default_filter)
    ctx.ensure_object(dict)["session"] = session

    if ctx.invoked_subcommand is None:
        _start_tui(session)


def _start_tui(session: TaskSession) -> None:
    """Helper to launch the Textual TUI."""
    try:
        from .interactive import TasklistApp
    except ImportError as exc:  # pragma: no cover - textual missing
        click.echo(f"Unable to start interactive mode: {exc}")
        return

    TasklistApp(session).run()


def _report_save(session: TaskSession) -> None:
    if session.last_save_error is not None:
        click.echo(f"Warning: changes not saved: {session.last_save_error}", err=True)


@main.command()
@click.pass_context
def tui(ctx: click.Context) -> None:
    """Start Textual TUI."""
    _start_tui(_session(ctx))


@main.command()
@click.argument("text")
@click.option("--due", "due_date", default=None, help="Due date (YYYY-MM-DD)")
@click.pass_context
def add(ctx: click.Context, text: str, due_date: Optional[str]) -> None:
    """Add a task."""
    session = _session(ctx)
    task = session.tasks.add_task(text, due_date)
    if task is None:
        raise click.ClickException("Task text must not be empty.")
    _report_save(session)
    click.echo(f"Added: {task.text}")


def filter_option(command):
    """``--filter`` for commands that list or address rows of the view."""
    return click.option(
        "--filter",
        "task_filter",
        type=click.Choice(FILTER_CHOICES, case_sensitive=False),
        default=None,
        help="Show all, completed or pending tasks",
    )(command)


def _apply_filter(session: TaskSession, task_filter: Optional[str]) -> None:
    if task_filter:
        session.set_filter(task_filter)


@main.command("list")
@filter_option
@click.pass_context
def list_tasks(ctx: click.Context, task_filter: Optional[str]) -> None:
    """List tasks sorted by due date; numbers are rows for toggle, delete and move."""
    session = _session(ctx)
    _apply_filter(session, task_filter)
    tasks = session.view()
    if not tasks:
        click.echo("No tasks.")
        return
    for row, task in enumerate(tasks, start=1):
        click.echo(_format_task(row, task))


def _position(value: int) -> int:
    # CLI rows are 1-based.
    return value - 1


@main.command()
@click.argument("position", type=int)
@filter_option
@click.pass_context
def toggle(ctx: click.Context, position: int, task_filter: Optional[str]) -> None:
    """Mark the task on row POSITION completed (or pending again)."""
    session = _session(ctx)
    _apply_filter(session, task_filter)
    try:
        task = session.toggle_task_status(_position(position))
    except TaskIndexError:
        raise click.ClickException(f"No task #{position}.") from None
    _report_save(session)
    state = "completed" if task.completed else "pending"
    click.echo(f"Task #{position} marked {state}: {task.text}")


@main.command()
@click.argument("position", type=int)
@filter_option
@click.pass_context
def delete(ctx: click.Context, position: int, task_filter: Optional[str]) -> None:
    """Delete the task on row POSITION."""
    session = _session(ctx)
    _apply_filter(session, task_filter)
    try:
        task = session.delete_task(_position(position))
    except TaskIndexError:
        raise click.ClickException(f"No task #{position}.") from None
    _report_save(session)
    click.echo(f"Deleted: {task.text}")


@main.command()
@click.argument("source", type=int)
@click.argument("destination", type=int)
@filter_option
@click.pass_context
def move(ctx: click.Context, source: int, destination: int, task_filter: Optional[str]) -> None:
    """Drag the task on row SOURCE onto row DESTINATION."""
    session = _session(ctx)
    _apply_filter(session, task_filter)
    try:
        task = session.reorder(_position(source), _position(destination))
    except TaskIndexError as exc:
        raise click.ClickException(f"No task #{exc.index + 1}.") from None
    _report_save(session)
    click.echo(f"Moved {task.text} to #{destination}")


@main.command()
@click.pass_context
def theme(ctx: click.Context) -> None:
    """Toggle dark mode."""
    session = _session(ctx)
    dark = session.toggle_dark_mode()
    _report_save(session)
    click.echo(f"Dark mode {'on' if dark else 'off'}")


if __name__ == "__main__":
    main()

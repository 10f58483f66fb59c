"""Commands 'delete' and 'clear' of chomper."""

import typer

from chomper.utils.ui.console import get_console
from chomper.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper
from .utils import make_confirm, open_session

console = get_console()


@command_wrapper
async def delete(
    task_ref: str = typer.Argument(..., help="Task number, ID or ID suffix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Delete a task."""
    async with open_session(profile, confirm=make_confirm(yes)) as session:
        task = await session.delete_task(task_ref)

    if task is None:
        format_info("Cancelled")
        raise typer.Exit(0)
    format_success(f"Deleted: {task.text}")


@command_wrapper
async def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Delete every completed task."""
    async with open_session(profile, confirm=make_confirm(yes)) as session:
        count = await session.clear_completed()
        declined = any(task.completed for task in session.state.tasks)

    if count:
        plural = "" if count == 1 else "s"
        format_success(f"Cleared {count} completed task{plural}")
    elif declined:
        format_info("Cancelled")
    else:
        format_info("No completed tasks to clear")

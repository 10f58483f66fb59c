"""Command 'edit' of chomper."""

from datetime import date
from typing import Optional

import typer

from chomper.services.task_service import EDIT_NEEDS_DUE_MESSAGE
from chomper.utils.errors import TaskValidationError
from chomper.utils.ui.console import get_console
from chomper.utils.ui.formatters import format_success, format_task_item

from .decorators import command_wrapper
from .utils import open_session, parse_due, parse_repeat_day, parse_time

console = get_console()


@command_wrapper
async def edit(
    task_ref: str = typer.Argument(..., help="Task number, ID or ID suffix"),
    text: Optional[str] = typer.Option(None, "--text", help="New title"),
    notes: Optional[str] = typer.Option(
        None, "--notes", "-n", help="New notes (empty string clears them)"
    ),
    due: Optional[str] = typer.Option(
        None, "--due", "-d", help="New due date: today, tomorrow or YYYY-MM-DD"
    ),
    due_time: Optional[str] = typer.Option(None, "--time", "-t", help="New due time (HH:MM)"),
    repeat: Optional[str] = typer.Option(
        None, "--repeat", "-r", help="Repeat: daily, weekly or monthly"
    ),
    no_repeat: bool = typer.Option(False, "--no-repeat", help="Stop repeating"),
    on: Optional[str] = typer.Option(
        None, "--on", help="Repeat day: weekday for weekly, 1-31 for monthly"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Edit a task. Options left out keep their current value."""
    today = date.today()
    due_date = parse_due(due, today)
    if due is not None and due_date is None:
        # An edited task always keeps a due date
        raise TaskValidationError(EDIT_NEEDS_DUE_MESSAGE)
    if no_repeat and repeat:
        raise TaskValidationError("Use either --repeat or --no-repeat, not both")

    async with open_session(profile) as session:
        with console.status("Saving task..."):
            if repeat is None and on is not None:
                # --on alone changes the day of the current pattern
                current = await session.find(task_ref)
                pattern = current.recurrence_type.value if current.recurrence_type else None
            else:
                pattern = repeat.lower() if repeat else None
            task = await session.edit_task(
                task_ref,
                text=text,
                notes=notes,
                due_date=due_date,
                due_time=parse_time(due_time),
                recurrence_type=repeat,
                recurrence_day=parse_repeat_day(on, pattern),
                stop_recurring=no_repeat,
            )
            updated = next((t for t in session.state.tasks if t.id == task.id), task)

    format_success("Task updated!")
    format_task_item(updated, today)

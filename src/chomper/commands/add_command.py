"""Command 'add' of chomper."""

from datetime import date
from typing import Optional

import typer

from chomper.config import get_config_manager
from chomper.utils.ui.console import get_console
from chomper.utils.ui.formatters import (
    format_output,
    format_success,
    format_task_item,
    task_to_dict,
)

from .decorators import command_wrapper
from .utils import open_session, parse_due, parse_repeat_day, parse_time

console = get_console()


@command_wrapper
async def add(
    text: str = typer.Argument(..., help="What needs chomping"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Task notes"),
    due: Optional[str] = typer.Option(
        None, "--due", "-d", help="Due date: today, tomorrow, someday or YYYY-MM-DD"
    ),
    due_time: Optional[str] = typer.Option(None, "--time", "-t", help="Due time (HH:MM)"),
    repeat: Optional[str] = typer.Option(
        None, "--repeat", "-r", help="Repeat: daily, weekly or monthly"
    ),
    on: Optional[str] = typer.Option(
        None, "--on", help="Repeat day: weekday for weekly, 1-31 for monthly"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output format: pretty or json (default from config)"
    ),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON (alias for --output json)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """
    Add a task.

    Examples:
      chomper add "Buy milk" --due tomorrow
      chomper add "Water plants" --due today --repeat weekly
      chomper add "Pay rent" --due 2024-07-01 --repeat monthly --on 1
    """
    if json_opt:
        output = "json"
    output = output or get_config_manager(profile).config.output.format

    today = date.today()
    due_date = parse_due(due, today)
    parsed_time = parse_time(due_time)
    recurrence_day = parse_repeat_day(on, repeat.lower() if repeat else None)

    async with open_session(profile) as session:
        with console.status("Adding task..."):
            task = await session.add_task(
                text,
                notes=notes,
                due_date=due_date,
                due_time=parsed_time,
                recurrence_type=repeat,
                recurrence_day=recurrence_day,
            )

    if output == "json":
        format_output(task_to_dict(task), "json")
        return

    format_success("Task added!")
    format_task_item(task, today)

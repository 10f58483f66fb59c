"""Command 'list' of chomper."""

from typing import Optional

import typer

from chomper.config import get_config_manager
from chomper.models import TaskFilter
from chomper.utils.task_cache import save_list_order
from chomper.utils.ui.console import get_console
from chomper.utils.ui.formatters import (
    format_chomper,
    format_output,
    format_view,
    view_to_dict,
)

from .decorators import command_wrapper
from .utils import open_session

console = get_console()


@command_wrapper
async def list_tasks(
    task_filter: Optional[TaskFilter] = typer.Option(
        None,
        "--filter",
        "-f",
        help="Show only: all, today, week, month or completed (default: date buckets)",
        case_sensitive=False,
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output format: pretty, json or yaml (default from config)"
    ),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON (alias for --output json)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """List tasks, numbered for use with edit, done and delete."""
    config = get_config_manager(profile).config
    if json_opt:
        output = "json"
    output = output or config.output.format
    if task_filter is None:
        task_filter = config.ui.default_filter

    async with open_session(profile) as session:
        session.set_filter(task_filter)
        if output == "pretty":
            with console.status("Loading tasks..."):
                await session.load()
        else:
            await session.load()
        view = session.view()
        state = session.state

    if output != "pretty":
        format_output(view_to_dict(view), output)
        return

    format_chomper(state.animation, session.animator.tasks_remaining)
    format_view(view, session.today())
    save_list_order([task.id for task in view.all_tasks()], profile)

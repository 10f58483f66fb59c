"""Command 'done' of chomper - toggle completion and let the chomper react."""

import asyncio
from datetime import date

import typer
from rich.live import Live

from chomper.config import get_config_manager
from chomper.models import ChomperState
from chomper.services.animation import ChomperAnimator
from chomper.utils.ui.console import get_console
from chomper.utils.ui.formatters import (
    chomper_panel,
    format_chomper,
    format_info,
    format_success,
    format_task_item,
)

from .decorators import command_wrapper
from .utils import open_session

console = get_console()

FRAME_SECONDS = 0.1


async def play_reaction(animator: ChomperAnimator, enabled: bool) -> None:
    """Show the chomper until its current reaction is over.

    With animations off, or when not writing to a terminal, the frame is
    printed once without waiting.
    """
    if not enabled or not console.is_terminal or animator.state is ChomperState.IDLE:
        format_chomper(animator.state, animator.tasks_remaining)
        return

    idle = asyncio.ensure_future(animator.wait_idle())
    with Live(
        chomper_panel(animator.state, animator.tasks_remaining),
        console=console,
        transient=False,
    ) as live:
        while not idle.done():
            live.update(chomper_panel(animator.state, animator.tasks_remaining))
            await asyncio.wait({idle}, timeout=FRAME_SECONDS)
        live.update(chomper_panel(animator.state, animator.tasks_remaining))


@command_wrapper
async def done(
    task_ref: str = typer.Argument(..., help="Task number, ID or ID suffix"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Complete a task, or reopen it if it is already done.

    Completing a repeating task schedules its next occurrence.
    """
    animation = get_config_manager(profile).config.animation

    async with open_session(profile) as session:
        with console.status("Chomping..."):
            completion = await session.toggle_complete(task_ref)

        if not completion.completed:
            format_info(f"Reopened: {completion.task.text}")
            return

        format_success(f"Done: {completion.task.text}")
        if completion.successor is not None:
            console.print("[dim]Next occurrence:[/dim]")
            format_task_item(completion.successor, date.today())
        await play_reaction(session.animator, animation.enabled)

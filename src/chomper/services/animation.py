"""Chomper animation state machine.

The chomper reacts to two events: a task being completed, and the number of
incomplete tasks changing. The transition functions are pure; the
``ChomperAnimator`` applies them and schedules the return to idle on the
running asyncio loop.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from chomper.models import ChomperState

logger = logging.getLogger(__name__)

CHOMP_SECONDS = 1.0
DANCE_SECONDS = 3.0


@dataclass(frozen=True)
class Reaction:
    """A state to show, and for how long before going back to idle."""

    state: ChomperState
    duration: float


def on_task_completed(
    incomplete_before: int, chomp_seconds: float = CHOMP_SECONDS
) -> Reaction | None:
    """Chomp when a task is completed, unless it was the last one.

    Completing the last task is celebrated by the count dropping to zero, so
    chomping here would play two animations for one action.
    """
    if incomplete_before > 1:
        return Reaction(ChomperState.CHOMPING, chomp_seconds)
    return None


def on_count_changed(
    previous: int, current: int, dance_seconds: float = DANCE_SECONDS
) -> Reaction | None:
    """Dance when the incomplete count goes from positive to zero."""
    if previous > 0 and current == 0:
        return Reaction(ChomperState.DANCING, dance_seconds)
    return None


def speech_bubble(state: ChomperState, tasks_remaining: int) -> str:
    """What the chomper says."""
    if state is ChomperState.DANCING and tasks_remaining == 0:
        return "All done! Great job! 🎊"
    if state is ChomperState.CHOMPING:
        return "Nom nom! 😋"
    if tasks_remaining == 0:
        return "Ready for tasks!"
    plural = "" if tasks_remaining == 1 else "s"
    return f"{tasks_remaining} task{plural} to chomp!"


def face(state: ChomperState) -> str:
    """The chomper itself."""
    if state is ChomperState.DANCING:
        return "🎉🦖🎉"
    return "🦖"


class ChomperAnimator:
    """Holds the chomper's state and resets it to idle after each reaction.

    Any pending reset is cancelled when a new reaction arrives or the animator
    is closed, so a stale timer never overwrites newer state.
    """

    def __init__(
        self,
        *,
        chomp_seconds: float = CHOMP_SECONDS,
        dance_seconds: float = DANCE_SECONDS,
        tasks_remaining: int = 0,
        on_change: Callable[[ChomperState], None] | None = None,
    ):
        self.chomp_seconds = chomp_seconds
        self.dance_seconds = dance_seconds
        self.state = ChomperState.IDLE
        self.tasks_remaining = tasks_remaining
        self.on_change = on_change
        self._timer: asyncio.TimerHandle | None = None
        self._idle = asyncio.Event()
        self._idle.set()

    def task_completed(self) -> Reaction | None:
        """Feed a completion; uses the count from before the refresh."""
        reaction = on_task_completed(self.tasks_remaining, self.chomp_seconds)
        if reaction is not None:
            self._apply(reaction)
        return reaction

    def count_changed(self, current: int) -> Reaction | None:
        """Feed the incomplete count after a refresh."""
        previous, self.tasks_remaining = self.tasks_remaining, current
        reaction = on_count_changed(previous, current, self.dance_seconds)
        if reaction is not None:
            self._apply(reaction)
        return reaction

    def _apply(self, reaction: Reaction) -> None:
        self._cancel_timer()
        logger.debug("chomper %s for %.1fs", reaction.state.value, reaction.duration)
        self._set_state(reaction.state)
        self._idle.clear()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop to time the reaction; the state holds until reset().
            return
        self._timer = loop.call_later(reaction.duration, self.reset)

    def _set_state(self, state: ChomperState) -> None:
        self.state = state
        if self.on_change is not None:
            self.on_change(state)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def reset(self) -> None:
        """Go back to idle."""
        self._cancel_timer()
        self._set_state(ChomperState.IDLE)
        self._idle.set()

    async def wait_idle(self) -> None:
        """Wait until the current reaction has finished playing."""
        await self._idle.wait()

    def close(self) -> None:
        """Cancel any pending reset without changing state."""
        self._cancel_timer()
        self._idle.set()

    @property
    def message(self) -> str:
        return speech_bubble(self.state, self.tasks_remaining)

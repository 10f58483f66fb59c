"""Helpers shared by the task commands."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import date, time, timedelta
from typing import Optional

import typer

from chomper.adapters.rest_api import RestApiTaskRepository
from chomper.api.client import APIClient
from chomper.config import get_config_manager
from chomper.models import RecurrenceType
from chomper.services.animation import ChomperAnimator
from chomper.services.auth_service import AuthService
from chomper.services.session import ChomperSession
from chomper.services.task_service import TaskService
from chomper.utils.errors import TaskValidationError
from chomper.utils.recurrence import parse_weekday
from chomper.utils.task_cache import get_list_order


def parse_due(value: Optional[str], today: date) -> Optional[date]:
    """Parse ``today``, ``tomorrow``, ``someday`` or ``YYYY-MM-DD``.

    ``someday`` means no due date and returns None, as does no value.
    """
    if value is None:
        return None
    value = value.strip().lower()
    if value == "today":
        return today
    if value == "tomorrow":
        return today + timedelta(days=1)
    if value in ("someday", "none", ""):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise TaskValidationError(
            f"Invalid due date '{value}'. Use today, tomorrow, someday or YYYY-MM-DD"
        ) from e


def parse_time(value: Optional[str]) -> Optional[time]:
    """Parse ``HH:MM`` (or ``HH:MM:SS``)."""
    if value is None:
        return None
    try:
        return time.fromisoformat(value.strip())
    except ValueError as e:
        raise TaskValidationError(f"Invalid time '{value}'. Use HH:MM") from e


def parse_repeat_day(
    value: Optional[str], recurrence_type: Optional[str]
) -> Optional[int]:
    """Parse ``--on``: a weekday for weekly tasks, a day of month for monthly."""
    if value is None:
        return None
    if recurrence_type == RecurrenceType.WEEKLY.value:
        return parse_weekday(value)
    try:
        return int(value)
    except ValueError as e:
        raise TaskValidationError(f"Invalid repeat day '{value}'") from e


def make_confirm(yes: bool) -> Callable[[str], bool]:
    """Confirmation callback: auto-yes with ``--yes``, otherwise ask."""
    if yes:
        return lambda message: True
    return lambda message: typer.confirm(message, default=False)


@asynccontextmanager
async def open_session(
    profile: str = "default",
    *,
    confirm: Optional[Callable[[str], bool]] = None,
) -> AsyncIterator[ChomperSession]:
    """Session for the signed-in user, closing the HTTP client on exit.

    List numbers given to the session refer to the last ``chomper list``
    when it is recent, otherwise to the default view.
    """
    config_manager = get_config_manager(profile)
    user = AuthService(config_manager).require_user()
    config = config_manager.config
    animation = config.animation

    async with APIClient(profile) as client:
        session = ChomperSession(
            TaskService(RestApiTaskRepository(client)),
            user,
            animator=ChomperAnimator(
                chomp_seconds=animation.chomp_seconds,
                dance_seconds=animation.dance_seconds,
            ),
            confirm=confirm or make_confirm(True),
            today=date.today,
            listed_ids=get_list_order(profile),
        )
        session.set_filter(config.ui.default_filter)
        try:
            yield session
        finally:
            session.close()

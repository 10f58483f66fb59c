"""Recurrence utility functions for Chomper.

Completing a recurring task inserts a successor whose due date is computed
here. Month arithmetic follows the rollover rule of the JavaScript ``Date``
object the hosted web client was built on: moving to a day that does not
exist in the target month spills the surplus days into the following month
(``Jan 31 + 1 month == Mar 2`` in a leap year, ``Mar 3`` otherwise). Setting
the anchor day afterwards overflows the same way (``day 31`` in April gives
``May 1``). Both steps overflow independently, exactly like ``setMonth``
followed by ``setDate``.
"""

from __future__ import annotations

from datetime import date, timedelta

from chomper.models.core import RecurrenceType, Task, TaskCreate
from chomper.utils.errors import TaskValidationError

# Sunday=0, matching the weekday numbering stored in recurrence_day.
WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

VALID_PATTERNS = [r.value for r in RecurrenceType]


def _rolled_date(year: int, month: int, day: int) -> date:
    """Build a date, letting an out-of-range month or day roll forward.

    ``month`` may exceed 12 and ``day`` may exceed the month's length; the
    surplus carries into the following year/month.
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def add_month(current: date) -> date:
    """Add one calendar month, overflowing short months."""
    return _rolled_date(current.year, current.month + 1, current.day)


def set_day_of_month(current: date, day: int) -> date:
    """Overwrite the day of month, overflowing into the next month if needed."""
    return _rolled_date(current.year, current.month, day)


def next_occurrence(
    current_due_date: date,
    recurrence_type: RecurrenceType | str,
    recurrence_day: int | None = None,
) -> date:
    """Compute the due date of the task that follows a completed occurrence.

    Args:
        current_due_date: Due date of the occurrence being completed
        recurrence_type: daily, weekly or monthly
        recurrence_day: Day of month for monthly tasks. Weekly tasks carry a
            weekday here too, but it only labels the task.

    Returns:
        The next due date
    """
    recurrence_type = RecurrenceType(recurrence_type)

    if recurrence_type is RecurrenceType.DAILY:
        return current_due_date + timedelta(days=1)

    if recurrence_type is RecurrenceType.WEEKLY:
        # Always a week after the completed occurrence, not the next
        # occurrence of recurrence_day.
        return current_due_date + timedelta(days=7)

    next_date = add_month(current_due_date)
    if recurrence_day:
        next_date = set_day_of_month(next_date, recurrence_day)
    return next_date


def build_successor(task: Task) -> TaskCreate:
    """Build the insert payload for the occurrence after ``task``.

    Raises:
        TaskValidationError: If the task is not recurring or has no due date
    """
    if not task.is_recurring or task.recurrence_type is None:
        raise TaskValidationError(f"Task '{task.text}' is not recurring")
    if task.due_date is None:
        raise TaskValidationError("Recurring tasks need a due date")

    return TaskCreate(
        user_id=task.user_id,
        text=task.text,
        notes=task.notes,
        completed=False,
        due_date=next_occurrence(
            task.due_date, task.recurrence_type, task.recurrence_day
        ),
        due_time=task.due_time,
        is_recurring=True,
        recurrence_type=task.recurrence_type,
        recurrence_day=task.recurrence_day,
    )


def validate_recurrence(
    recurrence_type: RecurrenceType | str | None,
    recurrence_day: int | None,
) -> RecurrenceType | None:
    """Check that a recurrence day fits its recurrence type.

    Returns:
        The parsed recurrence type, or None when no recurrence is set

    Raises:
        TaskValidationError: On an unknown type or an out-of-range day
    """
    if recurrence_type is None:
        if recurrence_day is not None:
            raise TaskValidationError("A repeat day needs a repeat pattern")
        return None

    try:
        if isinstance(recurrence_type, str):
            recurrence_type = recurrence_type.strip().lower()
        parsed = RecurrenceType(recurrence_type)
    except ValueError:
        raise TaskValidationError(
            f"Unknown repeat pattern '{recurrence_type}'. "
            f"Use one of: {', '.join(VALID_PATTERNS)}"
        ) from None

    if recurrence_day is None:
        return parsed
    if parsed is RecurrenceType.DAILY:
        raise TaskValidationError("Daily tasks do not take a repeat day")
    if parsed is RecurrenceType.WEEKLY and not 0 <= recurrence_day <= 6:
        raise TaskValidationError("Weekly repeat day must be 0 (Sunday) to 6 (Saturday)")
    if parsed is RecurrenceType.MONTHLY and not 1 <= recurrence_day <= 31:
        raise TaskValidationError("Monthly repeat day must be between 1 and 31")
    return parsed


def describe_recurrence(task: Task) -> str:
    """Human-readable description of a task's recurrence ('' if none)."""
    if not task.is_recurring or task.recurrence_type is None:
        return ""

    if task.recurrence_type is RecurrenceType.DAILY:
        return "Every day"
    if task.recurrence_type is RecurrenceType.WEEKLY:
        if task.recurrence_day is not None and 0 <= task.recurrence_day <= 6:
            return f"Every week on {WEEKDAY_NAMES[task.recurrence_day]}"
        return "Every week"
    if task.recurrence_day:
        return f"Every month on day {task.recurrence_day}"
    return "Every month"


def parse_weekday(value: str) -> int:
    """Parse a weekday name or number (Sunday=0) into 0-6."""
    value = value.strip().lower()
    if value.isdigit():
        return int(value)
    for index, name in enumerate(WEEKDAY_NAMES):
        if name.lower().startswith(value) and len(value) >= 2:
            return index
    raise TaskValidationError(f"Unknown weekday '{value}'")

"""Date bucketing and filtering of tasks for display.

All functions are pure: they take the full task collection plus a reference
``today`` and never touch the store. Comparisons are date-only.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone
from functools import cmp_to_key

from chomper.models.core import Buckets, FilteredView, Task, TaskFilter

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _timestamp(value: datetime | None) -> float:
    """Sortable timestamp; naive datetimes are taken as UTC."""
    if value is None:
        return _EPOCH.timestamp()
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def compare_tasks(a: Task, b: Task) -> int:
    """Pairwise display order used inside a bucket.

    When both tasks have a due date the earlier one comes first; otherwise the
    more recently created task comes first.
    """
    if a.due_date and b.due_date:
        if a.due_date == b.due_date:
            return 0
        return -1 if a.due_date < b.due_date else 1
    return int(_timestamp(b.created_at) > _timestamp(a.created_at)) - int(
        _timestamp(b.created_at) < _timestamp(a.created_at)
    )


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Sort tasks with compare_tasks (stable)."""
    return sorted(tasks, key=cmp_to_key(compare_tasks))


def is_today(due: date | None, today: date) -> bool:
    return due is not None and due == today


def is_tomorrow(due: date | None, today: date) -> bool:
    return due is not None and due == today + timedelta(days=1)


def is_overdue(due: date | None, today: date) -> bool:
    return due is not None and due < today


def is_this_week(due: date | None, today: date) -> bool:
    """Due within [today, today + 7 days], both ends included."""
    return due is not None and today <= due <= today + timedelta(days=7)


def is_this_month(due: date | None, today: date) -> bool:
    return due is not None and (due.year, due.month) == (today.year, today.month)


def bucket_for(task: Task, today: date) -> str:
    """Name of the bucket a task belongs to.

    Overdue tasks fold into ``today``; there is no separate missed bucket.
    """
    due = task.due_date
    if due is None:
        return "someday"
    tomorrow = today + timedelta(days=1)
    if due == tomorrow:
        return "tomorrow"
    if due > tomorrow:
        return "upcoming"
    return "today"


def bucket_tasks(tasks: Iterable[Task], today: date) -> Buckets:
    """Partition tasks into Today / Tomorrow / Upcoming / Someday.

    Every task lands in exactly one bucket, completed ones included.
    """
    grouped: dict[str, list[Task]] = {
        "today": [],
        "tomorrow": [],
        "upcoming": [],
        "someday": [],
    }
    for task in tasks:
        grouped[bucket_for(task, today)].append(task)

    return Buckets(**{name: sort_tasks(items) for name, items in grouped.items()})


def _completed_sort_key(task: Task) -> float:
    return _timestamp(task.updated_at or task.created_at)


def matches_filter(task: Task, task_filter: TaskFilter, today: date) -> bool:
    """Membership test for the active (incomplete) part of a filter."""
    if task_filter is TaskFilter.ALL:
        return True
    if task_filter is TaskFilter.TODAY:
        return is_today(task.due_date, today)
    if task_filter is TaskFilter.WEEK:
        return is_this_week(task.due_date, today)
    if task_filter is TaskFilter.MONTH:
        return is_this_month(task.due_date, today)
    return False


def filter_tasks(
    tasks: Iterable[Task], task_filter: TaskFilter | str, today: date
) -> FilteredView:
    """Narrow the collection with a filter.

    Completed tasks are always split off into their own group, most recently
    updated first, regardless of the filter.
    """
    task_filter = TaskFilter(task_filter)
    active: list[Task] = []
    completed: list[Task] = []
    for task in tasks:
        if task.completed:
            completed.append(task)
        elif matches_filter(task, task_filter, today):
            active.append(task)

    completed.sort(key=_completed_sort_key, reverse=True)
    return FilteredView(
        task_filter=task_filter,
        active=sort_tasks(active),
        completed=completed,
    )


def incomplete_count(tasks: Iterable[Task]) -> int:
    """Number of tasks still to chomp."""
    return sum(1 for task in tasks if not task.completed)


def format_due_label(due: date | None, today: date) -> str | None:
    """Short label for a due date: 'Today', 'Tomorrow' or e.g. 'Jun 17'."""
    if due is None:
        return None
    if due == today:
        return "Today"
    if is_tomorrow(due, today):
        return "Tomorrow"
    return f"{due.strftime('%b')} {due.day}"

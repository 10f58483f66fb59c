"""Task data models.

These mirror the columns of the hosted ``todos`` table. Dates travel over the
wire as ISO strings; pydantic parses them into ``date``/``time``/``datetime``.
"""

from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class RecurrenceType(str, Enum):
    """How a completed recurring task spawns its successor."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ChomperState(str, Enum):
    """What the chomper is doing right now."""

    IDLE = "idle"
    CHOMPING = "chomping"
    DANCING = "dancing"


class TaskFilter(str, Enum):
    """Selectable display filter, the alternative to date buckets."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    COMPLETED = "completed"


def _clear_recurrence_unless_recurring(data: Any) -> Any:
    """Drop recurrence_type/recurrence_day from non-recurring payloads."""
    if isinstance(data, dict) and data.get("is_recurring") is False:
        data = {**data, "recurrence_type": None, "recurrence_day": None}
    return data


class Task(BaseModel):
    """Task model representing one row of ``todos``.

    Attributes:
        id: Identifier assigned by the store
        user_id: Owner of the task
        text: Task title (never empty once stored)
        notes: Optional free-form notes
        completed: Completion status
        due_date: Calendar due date; None means "someday"
        due_time: Optional time of day, display only
        created_at: Creation timestamp (server-assigned)
        updated_at: Last update timestamp
        is_recurring: Whether completing the task spawns a successor
        recurrence_type: daily / weekly / monthly
        recurrence_day: Weekday 0-6 (Sunday=0) or day of month 1-31
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    text: str
    notes: str | None = None
    completed: bool = False
    due_date: date | None = None
    due_time: time | None = None
    created_at: datetime
    updated_at: datetime | None = None
    is_recurring: bool = False
    recurrence_type: RecurrenceType | None = None
    recurrence_day: int | None = None

    @model_validator(mode="before")
    @classmethod
    def normalise_recurrence(cls, data: Any) -> Any:
        return _clear_recurrence_unless_recurring(data)


class TaskCreate(BaseModel):
    """Insert payload for a new task.

    A recurring task must carry a recurrence type and a due date; a
    non-recurring one has its recurrence fields dropped.
    """

    user_id: str
    text: str
    notes: str | None = None
    completed: bool = False
    due_date: date | None = None
    due_time: time | None = None
    is_recurring: bool = False
    recurrence_type: RecurrenceType | None = None
    recurrence_day: int | None = None

    @model_validator(mode="before")
    @classmethod
    def normalise_recurrence(cls, data: Any) -> Any:
        return _clear_recurrence_unless_recurring(data)

    @model_validator(mode="after")
    def check_recurrence(self) -> TaskCreate:
        if self.is_recurring and self.recurrence_type is None:
            raise ValueError("a recurring task needs a recurrence_type")
        if self.is_recurring and self.due_date is None:
            raise ValueError("a recurring task needs a due_date")
        if not self.is_recurring and self.recurrence_type is not None:
            raise ValueError("recurrence_type is set but is_recurring is false")
        return self

    def to_row(self) -> dict[str, Any]:
        """Serialise to a JSON-ready row."""
        return self.model_dump(mode="json")


class TaskUpdate(BaseModel):
    """Partial update of an existing task.

    Only fields that were explicitly set are sent, so passing ``notes=None``
    clears the notes while omitting ``notes`` leaves them untouched.
    """

    text: str | None = None
    notes: str | None = None
    completed: bool | None = None
    due_date: date | None = None
    due_time: time | None = None
    is_recurring: bool | None = None
    recurrence_type: RecurrenceType | None = None
    recurrence_day: int | None = None

    def to_patch(self) -> dict[str, Any]:
        """Serialise only the explicitly-set fields."""
        return self.model_dump(mode="json", exclude_unset=True)


class User(BaseModel):
    """Signed-in user."""

    id: str
    email: EmailStr | None = None


class Buckets(BaseModel):
    """Tasks partitioned by due date for the default list view."""

    today: list[Task] = Field(default_factory=list)
    tomorrow: list[Task] = Field(default_factory=list)
    upcoming: list[Task] = Field(default_factory=list)
    someday: list[Task] = Field(default_factory=list)

    def sections(self) -> list[tuple[str, list[Task]]]:
        """Return (title, tasks) pairs in display order."""
        return [
            ("Today", self.today),
            ("Tomorrow", self.tomorrow),
            ("Upcoming", self.upcoming),
            ("Someday", self.someday),
        ]

    def all_tasks(self) -> list[Task]:
        """Flatten the buckets in display order."""
        return [task for _, tasks in self.sections() for task in tasks]


class FilteredView(BaseModel):
    """Tasks narrowed by a TaskFilter, completed ones segregated at the bottom."""

    task_filter: TaskFilter
    active: list[Task] = Field(default_factory=list)
    completed: list[Task] = Field(default_factory=list)

    def sections(self) -> list[tuple[str, list[Task]]]:
        """Return (title, tasks) pairs in display order."""
        titles = {
            TaskFilter.ALL: "All tasks",
            TaskFilter.TODAY: "Today",
            TaskFilter.WEEK: "This week",
            TaskFilter.MONTH: "This month",
            TaskFilter.COMPLETED: "Active",
        }
        return [
            (titles[self.task_filter], self.active),
            ("Completed", self.completed),
        ]

    def all_tasks(self) -> list[Task]:
        """Flatten the view in display order."""
        return self.active + self.completed

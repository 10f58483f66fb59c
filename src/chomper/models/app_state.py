"""Application state and its transitions.

``AppState`` is immutable; every transition returns a new state. The session
owns the current value and the CLI only reads it.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from chomper.models.core import (
    Buckets,
    ChomperState,
    FilteredView,
    Task,
    TaskFilter,
    User,
)
from chomper.utils import grouping
from chomper.utils.errors import TaskNotFoundError


class AppState(BaseModel):
    """Everything the presentation layer renders.

    Attributes:
        user: Signed-in user, None when signed out
        tasks: Full task collection as last loaded, newest first
        task_filter: Selected filter; None shows the date buckets
        editing_task_id: Task currently being edited
        loading: A store call is in flight
        animation: Current chomper state
        last_error: Message of the last failed action
    """

    model_config = ConfigDict(frozen=True)

    user: User | None = None
    tasks: list[Task] = Field(default_factory=list)
    task_filter: TaskFilter | None = None
    editing_task_id: str | None = None
    loading: bool = False
    animation: ChomperState = ChomperState.IDLE
    last_error: str | None = None

    @property
    def view(self) -> str:
        """Either ``buckets`` or ``filter``, depending on the selected filter."""
        return "buckets" if self.task_filter is None else "filter"


def with_loading(state: AppState) -> AppState:
    return state.model_copy(update={"loading": True})


def with_tasks(state: AppState, tasks: list[Task]) -> AppState:
    """Replace the task collection after a successful load."""
    return state.model_copy(
        update={"tasks": list(tasks), "loading": False, "last_error": None}
    )


def with_error(state: AppState, message: str) -> AppState:
    """Record a failed action; the task collection is left as it was."""
    return state.model_copy(update={"loading": False, "last_error": message})


def with_filter(state: AppState, task_filter: TaskFilter | str | None) -> AppState:
    """Select a filter, or None for the date buckets."""
    parsed = TaskFilter(task_filter) if task_filter is not None else None
    return state.model_copy(update={"task_filter": parsed})


def with_animation(state: AppState, animation: ChomperState) -> AppState:
    return state.model_copy(update={"animation": animation})


def begin_edit(state: AppState, task_id: str) -> AppState:
    """Mark a loaded task as the one being edited."""
    if not any(task.id == task_id for task in state.tasks):
        raise TaskNotFoundError(f"No task with ID '{task_id}'")
    return state.model_copy(update={"editing_task_id": task_id})


def end_edit(state: AppState) -> AppState:
    return state.model_copy(update={"editing_task_id": None})


def incomplete_count(state: AppState) -> int:
    return grouping.incomplete_count(state.tasks)


def display(state: AppState, today: date) -> Buckets | FilteredView:
    """Build the view the list screen shows."""
    if state.task_filter is None:
        return grouping.bucket_tasks(state.tasks, today)
    return grouping.filter_tasks(state.tasks, state.task_filter, today)

"""Task service - Business logic for task operations.

This service layer sits between the session and the repository. Validation
happens here, before any store call; store failures come up from the
repository as StoreError and are passed on unchanged, except for the
recurrence insert, which is reported as its own RecurrenceError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time

from chomper.models import RecurrenceType, Task, TaskCreate, TaskUpdate
from chomper.repositories import TaskRepository
from chomper.utils.errors import RecurrenceError, StoreError, TaskValidationError
from chomper.utils.recurrence import build_successor, validate_recurrence

logger = logging.getLogger(__name__)

EMPTY_TITLE_MESSAGE = "Please enter a task!"
RECURRING_NEEDS_DUE_MESSAGE = "Please select a due date for a recurring task!"
EDIT_NEEDS_DUE_MESSAGE = "Please select a due date!"


def clean_text(text: str | None) -> str:
    """Trim a task title, rejecting an empty one."""
    cleaned = (text or "").strip()
    if not cleaned:
        raise TaskValidationError(EMPTY_TITLE_MESSAGE)
    return cleaned


def clean_notes(notes: str | None) -> str | None:
    """Trim notes; empty notes become None."""
    if notes is None:
        return None
    return notes.strip() or None


@dataclass(frozen=True)
class Completion:
    """Outcome of toggling a task's completion."""

    task: Task
    completed: bool
    successor: Task | None = None


class TaskService:
    """Service for task business logic.

    This service encapsulates business rules and orchestrates task operations
    using the task repository.
    """

    def __init__(self, task_repository: TaskRepository):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
        """
        self.repository = task_repository

    async def list_tasks(self, user_id: str) -> list[Task]:
        """List every task of a user, newest first."""
        return await self.repository.list_all(user_id)

    async def add_task(
        self,
        user_id: str,
        text: str,
        *,
        notes: str | None = None,
        due_date: date | None = None,
        due_time: time | None = None,
        recurrence_type: RecurrenceType | str | None = None,
        recurrence_day: int | None = None,
    ) -> Task:
        """Create a new task.

        Args:
            user_id: Owner of the task
            text: Task title, trimmed; must not be empty
            notes: Optional notes, trimmed; empty becomes None
            due_date: Due date, None for someday
            due_time: Optional time of day
            recurrence_type: daily/weekly/monthly to make the task recurring
            recurrence_day: Weekday (weekly) or day of month (monthly)

        Returns:
            Created Task object

        Raises:
            TaskValidationError: Before any store call, on invalid input
            StoreError: If the insert fails
        """
        cleaned_text = clean_text(text)
        parsed_type = validate_recurrence(recurrence_type, recurrence_day)
        if parsed_type is not None and due_date is None:
            raise TaskValidationError(RECURRING_NEEDS_DUE_MESSAGE)

        task_data = TaskCreate(
            user_id=user_id,
            text=cleaned_text,
            notes=clean_notes(notes),
            completed=False,
            due_date=due_date,
            due_time=due_time,
            is_recurring=parsed_type is not None,
            recurrence_type=parsed_type,
            recurrence_day=recurrence_day if parsed_type is not None else None,
        )
        task = await self.repository.add(task_data)
        logger.info("added task %s", task.id)
        return task

    async def edit_task(
        self,
        task: Task,
        *,
        text: str | None = None,
        notes: str | None = None,
        due_date: date | None = None,
        due_time: time | None = None,
        recurrence_type: RecurrenceType | str | None = None,
        recurrence_day: int | None = None,
        stop_recurring: bool = False,
    ) -> None:
        """Edit an existing task.

        Arguments left as None keep the task's current value; pass ``notes=""``
        to clear the notes. An edited task must end up with a due date.

        Raises:
            TaskValidationError: Before any store call, on invalid input
            StoreError: If the update fails
        """
        new_text = clean_text(text) if text is not None else task.text
        new_notes = clean_notes(notes) if notes is not None else task.notes
        new_due = due_date or task.due_date
        new_time = due_time or task.due_time

        if stop_recurring:
            new_type, new_day = None, None
        elif recurrence_type is not None:
            new_type = validate_recurrence(recurrence_type, None)
            if recurrence_day is not None:
                new_day = recurrence_day
            elif new_type == task.recurrence_type:
                new_day = task.recurrence_day
            else:
                new_day = None
        else:
            new_type = task.recurrence_type if task.is_recurring else None
            if recurrence_day is not None or new_type is None:
                new_day = recurrence_day
            else:
                new_day = task.recurrence_day

        new_type = validate_recurrence(new_type, new_day)

        if new_due is None:
            if new_type is not None:
                raise TaskValidationError(RECURRING_NEEDS_DUE_MESSAGE)
            raise TaskValidationError(EDIT_NEEDS_DUE_MESSAGE)

        updates = TaskUpdate(
            text=new_text,
            notes=new_notes,
            due_date=new_due,
            due_time=new_time,
            is_recurring=new_type is not None,
            recurrence_type=new_type,
            recurrence_day=new_day if new_type is not None else None,
        )
        await self.repository.update(task.id, updates)
        logger.info("edited task %s", task.id)

    async def toggle_complete(self, task: Task) -> Completion:
        """Flip a task's completion.

        Completing a recurring task first inserts its successor, then marks the
        task itself completed. The two calls are not atomic:

        * if the insert fails, the task is left incomplete and RecurrenceError
          is raised;
        * if the insert succeeds but marking the task fails, the successor
          stays in the store and StoreError is raised.

        Reopening a completed task never creates anything.
        """
        if task.completed:
            await self.repository.update(task.id, TaskUpdate(completed=False))
            logger.info("reopened task %s", task.id)
            return Completion(task=task, completed=False)

        successor = None
        if task.is_recurring:
            successor_data = build_successor(task)
            try:
                successor = await self.repository.add(successor_data)
            except StoreError as e:
                logger.error("next occurrence of task %s not created: %s", task.id, e)
                raise RecurrenceError() from e
            logger.info(
                "created next occurrence %s of task %s due %s",
                successor.id,
                task.id,
                successor.due_date,
            )

        try:
            await self.repository.update(task.id, TaskUpdate(completed=True))
        except StoreError:
            if successor is not None:
                logger.error(
                    "next occurrence %s was created but task %s was not completed",
                    successor.id,
                    task.id,
                )
            raise

        logger.info("completed task %s", task.id)
        return Completion(task=task, completed=True, successor=successor)

    async def delete_task(self, task_id: str) -> None:
        """Delete a task."""
        await self.repository.delete(task_id)
        logger.info("deleted task %s", task_id)

    async def clear_completed(self, tasks: list[Task]) -> int:
        """Delete every completed task in ``tasks``.

        Returns:
            Number of tasks deleted (0 makes no store call)
        """
        task_ids = [task.id for task in tasks if task.completed]
        if not task_ids:
            return 0
        await self.repository.delete_many(task_ids)
        logger.info("cleared %d completed task(s)", len(task_ids))
        return len(task_ids)

"""Chomper session - owns the application state for one signed-in user.

Every mutation goes through the task service and is followed by a full
refresh of the task collection; the refreshed incomplete count drives the
chomper animation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, time

from chomper.models import (
    Buckets,
    ChomperState,
    FilteredView,
    RecurrenceType,
    Task,
    TaskFilter,
    User,
)
from chomper.models import app_state as state_fns
from chomper.models.app_state import AppState
from chomper.services.animation import ChomperAnimator
from chomper.services.auth_service import NOT_LOGGED_IN_MESSAGE
from chomper.services.task_service import Completion, TaskService
from chomper.utils.errors import AuthError, ChomperError
from chomper.utils.task_helpers import resolve_task

logger = logging.getLogger(__name__)

DELETE_CONFIRM_MESSAGE = "Are you sure you want to delete this task?"
CLEAR_CONFIRM_MESSAGE = "Delete all completed tasks?"


def _always_confirm(message: str) -> bool:
    return True


class ChomperSession:
    """Application session for a signed-in user.

    Args:
        service: Task service doing the validation and store calls
        user: The signed-in user
        animator: Chomper animator; a fresh one is created when omitted
        confirm: Asked before destructive actions, returns True to proceed
        today: Returns the reference date for bucketing
        listed_ids: Task IDs in the order the last ``chomper list`` numbered
            them; list numbers refer to this order when given
    """

    def __init__(
        self,
        service: TaskService,
        user: User,
        *,
        animator: ChomperAnimator | None = None,
        confirm: Callable[[str], bool] = _always_confirm,
        today: Callable[[], date] = date.today,
        listed_ids: list[str] | None = None,
    ):
        self.service = service
        self.confirm = confirm
        self.today = today
        self.listed_ids = listed_ids
        self.state = AppState(user=user)
        self.animator = animator or ChomperAnimator()
        self.animator.on_change = self._on_animation_change
        self._loaded = False

    @property
    def user(self) -> User:
        if self.state.user is None:
            raise AuthError(NOT_LOGGED_IN_MESSAGE)
        return self.state.user

    def _on_animation_change(self, animation: ChomperState) -> None:
        self.state = state_fns.with_animation(self.state, animation)

    def _fail(self, error: ChomperError) -> None:
        self.state = state_fns.with_error(self.state, str(error))

    async def _ensure_loaded(self) -> None:
        if not self._loaded:
            await self.refresh()

    async def refresh(self) -> AppState:
        """Reload every task of the user.

        On failure the previous task list is kept and the error re-raised.
        """
        self.state = state_fns.with_loading(self.state)
        try:
            tasks = await self.service.list_tasks(self.user.id)
        except ChomperError as e:
            self._fail(e)
            raise
        self.state = state_fns.with_tasks(self.state, tasks)
        self.animator.count_changed(state_fns.incomplete_count(self.state))
        self._loaded = True
        return self.state

    async def load(self) -> AppState:
        """Initial load; the chomper starts from the loaded count without reacting."""
        await self.refresh()
        self.animator.reset()
        return self.state

    def set_filter(self, task_filter: TaskFilter | str | None) -> None:
        """Select a filter, or None for the date buckets."""
        self.state = state_fns.with_filter(self.state, task_filter)

    def view(self) -> Buckets | FilteredView:
        """The current list view (buckets or filtered)."""
        return state_fns.display(self.state, self.today())

    def visible_tasks(self) -> list[Task]:
        """Tasks in the order the list numbers them."""
        return self.view().all_tasks()

    def numbered_tasks(self) -> list[Task | None]:
        """Tasks by list number.

        Follows the last listed order when known, with None for listed tasks
        that are gone; otherwise the current view.
        """
        if self.listed_ids is None:
            return self.visible_tasks()
        by_id = {task.id: task for task in self.state.tasks}
        return [by_id.get(task_id) for task_id in self.listed_ids]

    async def find(self, reference: str) -> Task:
        """Resolve a list number, ID or ID suffix to a loaded task."""
        await self._ensure_loaded()
        try:
            return resolve_task(self.state.tasks, reference, self.numbered_tasks())
        except ChomperError as e:
            self._fail(e)
            raise

    async def add_task(
        self,
        text: str,
        *,
        notes: str | None = None,
        due_date: date | None = None,
        due_time: time | None = None,
        recurrence_type: RecurrenceType | str | None = None,
        recurrence_day: int | None = None,
    ) -> Task:
        """Create a task, then refresh."""
        await self._ensure_loaded()
        try:
            task = await self.service.add_task(
                self.user.id,
                text,
                notes=notes,
                due_date=due_date,
                due_time=due_time,
                recurrence_type=recurrence_type,
                recurrence_day=recurrence_day,
            )
        except ChomperError as e:
            self._fail(e)
            raise
        await self.refresh()
        return task

    async def edit_task(self, reference: str, **changes) -> Task:
        """Edit a task, then refresh.

        ``changes`` are passed to ``TaskService.edit_task``.
        """
        task = await self.find(reference)
        self.state = state_fns.begin_edit(self.state, task.id)
        try:
            await self.service.edit_task(task, **changes)
        except ChomperError as e:
            self._fail(e)
            raise
        finally:
            self.state = state_fns.end_edit(self.state)
        await self.refresh()
        return task

    async def toggle_complete(self, reference: str) -> Completion:
        """Toggle a task's completion, then refresh.

        Completing a task first lets the chomper react to the count from
        before the refresh; the refresh then feeds the new count.
        """
        task = await self.find(reference)
        try:
            completion = await self.service.toggle_complete(task)
        except ChomperError as e:
            self._fail(e)
            raise
        if completion.completed:
            self.animator.task_completed()
        await self.refresh()
        return completion

    async def delete_task(self, reference: str) -> Task | None:
        """Delete a task after confirmation.

        Returns:
            The deleted task, or None if the confirmation was declined
        """
        task = await self.find(reference)
        if not self.confirm(DELETE_CONFIRM_MESSAGE):
            logger.info("delete of task %s declined", task.id)
            return None
        try:
            await self.service.delete_task(task.id)
        except ChomperError as e:
            self._fail(e)
            raise
        await self.refresh()
        return task

    async def clear_completed(self) -> int:
        """Delete every completed task after confirmation.

        Returns:
            Number of tasks deleted
        """
        await self._ensure_loaded()
        if not any(task.completed for task in self.state.tasks):
            return 0
        if not self.confirm(CLEAR_CONFIRM_MESSAGE):
            logger.info("clear completed declined")
            return 0
        try:
            count = await self.service.clear_completed(self.state.tasks)
        except ChomperError as e:
            self._fail(e)
            raise
        await self.refresh()
        return count

    def close(self) -> None:
        """Cancel pending animation timers."""
        self.animator.close()

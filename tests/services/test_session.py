"""Tests for ChomperSession."""

from datetime import date

import pytest

from chomper.models import ChomperState, User
from chomper.services.animation import ChomperAnimator
from chomper.services.session import DELETE_CONFIRM_MESSAGE, ChomperSession
from chomper.services.task_service import TaskService
from chomper.utils.errors import (
    AuthError,
    StoreError,
    TaskNotFoundError,
    TaskValidationError,
)

TODAY = date(2024, 6, 10)


@pytest.fixture
def prompts():
    return []


@pytest.fixture
def make_session(memory_repo, prompts):
    def _make(answer: bool = True, listed_ids: list[str] | None = None) -> ChomperSession:
        def confirm(message: str) -> bool:
            prompts.append(message)
            return answer

        return ChomperSession(
            TaskService(memory_repo),
            User(id="user-1", email="chomp@example.com"),
            animator=ChomperAnimator(chomp_seconds=0.01, dance_seconds=0.01),
            confirm=confirm,
            today=lambda: TODAY,
            listed_ids=listed_ids,
        )

    return _make


class TestRefresh:
    @pytest.mark.asyncio
    async def test_loads_tasks(self, make_session, memory_repo, task_factory):
        memory_repo.seed(task_factory("a"), task_factory("b", completed=True))
        session = make_session()

        state = await session.load()

        assert len(state.tasks) == 2
        assert state.loading is False
        assert session.animator.tasks_remaining == 1
        assert state.animation is ChomperState.IDLE

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_tasks(self, make_session, memory_repo, task_factory):
        memory_repo.seed(task_factory("a"))
        session = make_session()
        await session.load()
        memory_repo.fail_on["list_all"] = StoreError("Failed to load tasks")

        with pytest.raises(StoreError):
            await session.refresh()

        assert len(session.state.tasks) == 1
        assert session.state.last_error == "Failed to load tasks"
        assert session.state.loading is False


class TestMutations:
    @pytest.mark.asyncio
    async def test_add_refreshes(self, make_session, memory_repo):
        session = make_session()

        await session.add_task("Buy milk", due_date=TODAY)

        assert memory_repo.call_names() == ["list_all", "add", "list_all"]
        assert [t.text for t in session.state.tasks] == ["Buy milk"]

    @pytest.mark.asyncio
    async def test_validation_error_recorded(self, make_session, memory_repo):
        session = make_session()

        with pytest.raises(TaskValidationError):
            await session.add_task("   ")

        assert session.state.last_error == "Please enter a task!"
        assert "add" not in memory_repo.call_names()

    @pytest.mark.asyncio
    async def test_edit_by_list_number(self, make_session, memory_repo, task_factory):
        memory_repo.seed(task_factory("Old", due_date=TODAY))
        session = make_session()

        await session.edit_task("1", text="New")

        assert [t.text for t in session.state.tasks] == ["New"]
        assert session.state.editing_task_id is None

    @pytest.mark.asyncio
    async def test_unknown_reference(self, make_session):
        session = make_session()
        with pytest.raises(TaskNotFoundError):
            await session.toggle_complete("nope")

    @pytest.mark.asyncio
    async def test_completing_one_of_three_chomps(self, make_session, memory_repo, task_factory):
        memory_repo.seed(
            task_factory("a", due_date=TODAY),
            task_factory("b", due_date=TODAY),
            task_factory("c", due_date=TODAY),
        )
        session = make_session()
        await session.load()

        completion = await session.toggle_complete("1")

        assert completion.completed is True
        assert session.state.animation is ChomperState.CHOMPING
        assert session.animator.tasks_remaining == 2

    @pytest.mark.asyncio
    async def test_completing_last_task_dances(self, make_session, memory_repo, task_factory):
        memory_repo.seed(task_factory("only", due_date=TODAY))
        session = make_session()
        await session.load()

        await session.toggle_complete("1")

        assert session.state.animation is ChomperState.DANCING
        assert session.animator.message == "All done! Great job! 🎊"

    @pytest.mark.asyncio
    async def test_recurring_completion_adds_next(self, make_session, memory_repo, task_factory):
        memory_repo.seed(
            task_factory("Gym", due_date=TODAY, is_recurring=True, recurrence_type="daily")
        )
        session = make_session()

        completion = await session.toggle_complete("1")

        assert completion.successor.due_date == date(2024, 6, 11)
        assert len(session.state.tasks) == 2

    @pytest.mark.asyncio
    async def test_delete_asks_first(self, make_session, memory_repo, task_factory, prompts):
        task = task_factory("doomed")
        memory_repo.seed(task)
        session = make_session()

        deleted = await session.delete_task(task.id)

        assert deleted.id == task.id
        assert prompts == [DELETE_CONFIRM_MESSAGE]
        assert session.state.tasks == []

    @pytest.mark.asyncio
    async def test_declined_delete_makes_no_store_call(
        self, make_session, memory_repo, task_factory
    ):
        task = task_factory("kept")
        memory_repo.seed(task)
        session = make_session(answer=False)

        assert await session.delete_task(task.id) is None
        assert "delete" not in memory_repo.call_names()
        assert task.id in memory_repo.tasks

    @pytest.mark.asyncio
    async def test_clear_completed(self, make_session, memory_repo, task_factory):
        memory_repo.seed(task_factory(completed=True), task_factory(), task_factory(completed=True))
        session = make_session()

        assert await session.clear_completed() == 2
        assert len(session.state.tasks) == 1

    @pytest.mark.asyncio
    async def test_clear_completed_declined(self, make_session, memory_repo, task_factory):
        memory_repo.seed(task_factory(completed=True))
        session = make_session(answer=False)

        assert await session.clear_completed() == 0
        assert "delete_many" not in memory_repo.call_names()


class TestView:
    @pytest.mark.asyncio
    async def test_filter_switches_view(self, make_session, memory_repo, task_factory):
        memory_repo.seed(task_factory("today", due_date=TODAY), task_factory("someday"))
        session = make_session()
        await session.load()

        assert [t.text for t in session.view().today] == ["today"]

        session.set_filter("today")
        assert session.state.view == "filter"
        assert [t.text for t in session.view().active] == ["today"]

    @pytest.mark.asyncio
    async def test_find_uses_display_order(self, make_session, memory_repo, task_factory):
        memory_repo.seed(task_factory("someday"), task_factory("today", due_date=TODAY))
        session = make_session()

        assert (await session.find("1")).text == "today"
        assert (await session.find("2")).text == "someday"

    @pytest.mark.asyncio
    async def test_find_uses_last_listed_order(self, make_session, memory_repo, task_factory):
        open_task = task_factory("open", due_date=TODAY)
        finished = task_factory("finished", completed=True)
        memory_repo.seed(open_task, finished)
        session = make_session(listed_ids=[finished.id])

        assert (await session.find("1")).id == finished.id
        # Outside the listed numbers, references are still IDs or suffixes
        assert (await session.find(open_task.id)).id == open_task.id

    @pytest.mark.asyncio
    async def test_find_listed_task_that_is_gone(self, make_session, memory_repo, task_factory):
        memory_repo.seed(task_factory("still here", due_date=TODAY))
        session = make_session(listed_ids=["task-gone"])

        with pytest.raises(TaskNotFoundError, match="no longer exists"):
            await session.find("1")
        assert session.state.last_error is not None

    def test_user_required(self, make_session):
        session = make_session()
        session.state = session.state.model_copy(update={"user": None})

        with pytest.raises(AuthError, match="Not logged in"):
            session.user

"""Tests for AppState transitions."""

from datetime import date

import pytest
from pydantic import ValidationError

from chomper.models import Buckets, ChomperState, FilteredView, TaskFilter, User
from chomper.models import app_state as fns
from chomper.models.app_state import AppState
from chomper.utils.errors import TaskNotFoundError

TODAY = date(2024, 6, 10)


@pytest.fixture
def state(task_factory):
    return fns.with_tasks(
        AppState(user=User(id="user-1")),
        [task_factory("a", due_date=TODAY), task_factory("b", completed=True)],
    )


def test_state_is_immutable(state):
    with pytest.raises(ValidationError):
        state.loading = True


def test_with_tasks_clears_loading_and_error(task_factory):
    start = fns.with_error(fns.with_loading(AppState()), "boom")
    loaded = fns.with_tasks(fns.with_loading(start), [task_factory()])

    assert loaded.loading is False
    assert loaded.last_error is None
    assert len(loaded.tasks) == 1


def test_with_error_keeps_tasks(state):
    failed = fns.with_error(fns.with_loading(state), "Failed to load tasks")

    assert failed.tasks == state.tasks
    assert failed.last_error == "Failed to load tasks"
    assert failed.loading is False


def test_transitions_return_new_state(state):
    filtered = fns.with_filter(state, "week")

    assert state.task_filter is None
    assert filtered.task_filter is TaskFilter.WEEK
    assert fns.with_filter(filtered, None).view == "buckets"


def test_edit_cycle(state):
    task = state.tasks[0]

    editing = fns.begin_edit(state, task.id)
    assert editing.editing_task_id == task.id

    done = fns.end_edit(editing)
    assert done.editing_task_id is None


def test_begin_edit_unknown_task(state):
    with pytest.raises(TaskNotFoundError):
        fns.begin_edit(state, "missing")


def test_incomplete_count(state):
    assert fns.incomplete_count(state) == 1


def test_with_animation(state):
    assert fns.with_animation(state, ChomperState.DANCING).animation is ChomperState.DANCING


def test_display(state):
    assert isinstance(fns.display(state, TODAY), Buckets)

    view = fns.display(fns.with_filter(state, TaskFilter.COMPLETED), TODAY)
    assert isinstance(view, FilteredView)
    assert [t.text for t in view.completed] == ["b"]

"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

import itertools
from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from chomper.config import reset_config_manager
from chomper.models import Task, TaskCreate, TaskUpdate
from chomper.repositories import TaskRepository

USER_ID = "user-1"


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point config, data, cache and log directories at *tmp_path*."""
    tmpdir = str(tmp_path)
    monkeypatch.delenv("CHOMPER_URL", raising=False)
    monkeypatch.delenv("CHOMPER_ANON_KEY", raising=False)
    reset_config_manager()
    with patch("chomper.config.user_config_dir", return_value=tmpdir):
        with patch("chomper.config.user_data_dir", return_value=tmpdir):
            with patch("chomper.utils.logger.user_log_dir", return_value=tmpdir):
                with patch("chomper.utils.task_cache.user_cache_dir", return_value=tmpdir):
                    yield tmp_path
    reset_config_manager()


# ---------------------------------------------------------------------------
# Task factories
# ---------------------------------------------------------------------------

_ids = itertools.count(1)
_BASE_CREATED = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_task(text: str = "Task", **fields) -> Task:
    """Build a Task with sensible defaults."""
    n = next(_ids)
    data = {
        "id": f"task-{n:04d}",
        "user_id": USER_ID,
        "text": text,
        "created_at": _BASE_CREATED + timedelta(seconds=n),
    }
    data.update(fields)
    return Task(**data)


@pytest.fixture
def task_factory():
    return make_task


class InMemoryTaskRepository(TaskRepository):
    """TaskRepository keeping rows in a dict, recording every call."""

    def __init__(self, tasks: list[Task] | None = None):
        self.tasks: dict[str, Task] = {t.id: t for t in tasks or []}
        self.calls: list[tuple] = []
        self.fail_on: dict[str, Exception] = {}
        self._next = itertools.count(1)

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail_on:
            raise self.fail_on[op]

    async def list_all(self, user_id: str) -> list[Task]:
        self.calls.append(("list_all", user_id))
        self._maybe_fail("list_all")
        tasks = [t for t in self.tasks.values() if t.user_id == user_id]
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)

    async def add(self, task_data: TaskCreate) -> Task:
        self.calls.append(("add", task_data))
        self._maybe_fail("add")
        task = Task(
            id=f"new-{next(self._next):04d}",
            created_at=datetime.now(timezone.utc),
            **task_data.model_dump(),
        )
        self.tasks[task.id] = task
        return task

    async def update(self, task_id: str, updates: TaskUpdate) -> None:
        self.calls.append(("update", task_id, updates))
        self._maybe_fail("update")
        task = self.tasks[task_id]
        merged = {**task.model_dump(), **updates.model_dump(exclude_unset=True)}
        merged["updated_at"] = datetime.now(timezone.utc)
        self.tasks[task_id] = Task(**merged)

    async def delete(self, task_id: str) -> None:
        self.calls.append(("delete", task_id))
        self._maybe_fail("delete")
        self.tasks.pop(task_id, None)

    async def delete_many(self, task_ids: list[str]) -> None:
        self.calls.append(("delete_many", list(task_ids)))
        self._maybe_fail("delete_many")
        for task_id in task_ids:
            self.tasks.pop(task_id, None)

    def seed(self, *tasks: Task) -> None:
        for task in tasks:
            self.tasks[task.id] = task

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def memory_repo():
    return InMemoryTaskRepository()


@pytest.fixture
def today():
    return date(2024, 6, 10)

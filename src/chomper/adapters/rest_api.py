"""REST API adapter - TaskRepository implementation over the hosted ``todos`` table.

httpx failures are logged here and translated into the application's error
types, so nothing above this layer deals with HTTP.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx

from chomper.api.client import APIClient
from chomper.api.todos import TodosAPI
from chomper.models import Task, TaskCreate, TaskUpdate
from chomper.repositories.repository import TaskRepository
from chomper.utils.errors import AuthError, StoreError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Translate httpx failures of one store call into StoreError/AuthError."""
    try:
        yield
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.error("%s failed: HTTP %s %s", action, status, e.response.text)
        if status in (401, 403):
            raise AuthError(
                "Your session was rejected. Please login again: chomper login"
            ) from e
        raise StoreError(f"Failed to {action}") from e
    except httpx.RequestError as e:
        logger.error("%s failed: %r", action, e)
        raise StoreError(f"Failed to {action}: could not reach the server") from e


class RestApiTaskRepository(TaskRepository):
    """Task repository implementation using the REST table API."""

    def __init__(self, client: APIClient | None = None):
        self._client = client
        self._todos_api: TodosAPI | None = None

    @property
    def todos_api(self) -> TodosAPI:
        """Get or create TodosAPI instance."""
        if self._todos_api is None:
            if self._client is None:
                self._client = APIClient()
            self._todos_api = TodosAPI(self._client)
        return self._todos_api

    async def list_all(self, user_id: str) -> list[Task]:
        """List all tasks of a user."""
        with store_errors("load tasks"):
            rows = await self.todos_api.list_todos(user_id)
        return [Task(**row) for row in rows]

    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task."""
        with store_errors("add task"):
            row = await self.todos_api.insert_todo(task_data.to_row())
        return Task(**row)

    async def update(self, task_id: str, updates: TaskUpdate) -> None:
        """Update an existing task."""
        with store_errors("update task"):
            await self.todos_api.update_todo(task_id, updates.to_patch())

    async def delete(self, task_id: str) -> None:
        """Delete a task."""
        with store_errors("delete task"):
            await self.todos_api.delete_todo(task_id)

    async def delete_many(self, task_ids: list[str]) -> None:
        """Delete several tasks."""
        with store_errors("delete tasks"):
            await self.todos_api.delete_todos(task_ids)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.close()

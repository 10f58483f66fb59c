"""Repository abstraction layer for Chomper.

The task store is reached only through this interface, so business logic can
be exercised against a fake store in tests and the hosted backend in use.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from chomper.models import Task, TaskCreate, TaskUpdate


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    Mutations return nothing useful to display; callers re-read the whole
    collection with ``list_all`` afterwards.
    """

    @abstractmethod
    async def list_all(self, user_id: str) -> list[Task]:
        """List every task owned by a user.

        Raises:
            StoreError: If the store call fails
        """
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task.

        Returns:
            Created Task with its store-assigned id and timestamps

        Raises:
            StoreError: If the store call fails
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, task_id: str, updates: TaskUpdate) -> None:
        """Update the fields set on ``updates``.

        Raises:
            StoreError: If the store call fails
        """
        raise NotImplementedError(
            "TaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, task_id: str) -> None:
        """Delete a task.

        Raises:
            StoreError: If the store call fails
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_many(self, task_ids: list[str]) -> None:
        """Delete several tasks in one call.

        Raises:
            StoreError: If the store call fails
        """
        raise NotImplementedError(
            "TaskRepository.delete_many() must be implemented by adapter"
        )

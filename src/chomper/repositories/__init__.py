"""Repository interfaces for Chomper."""

from chomper.repositories.repository import TaskRepository

__all__ = ["TaskRepository"]

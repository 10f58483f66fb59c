"""Chomper domain models.

Pydantic models for the task entity and the views built from it.
"""

from .core import (
    Buckets,
    ChomperState,
    FilteredView,
    RecurrenceType,
    Task,
    TaskCreate,
    TaskFilter,
    TaskUpdate,
    User,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "RecurrenceType",
    # Views
    "Buckets",
    "FilteredView",
    "TaskFilter",
    "ChomperState",
    # User model
    "User",
]

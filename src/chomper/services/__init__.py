"""Business logic services for Chomper."""

from chomper.services.animation import ChomperAnimator
from chomper.services.session import ChomperSession
from chomper.services.task_service import Completion, TaskService

__all__ = ["ChomperAnimator", "ChomperSession", "Completion", "TaskService"]

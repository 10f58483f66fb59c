"""Storage adapters implementing the repository interfaces."""

from chomper.adapters.rest_api import RestApiTaskRepository

__all__ = ["RestApiTaskRepository"]

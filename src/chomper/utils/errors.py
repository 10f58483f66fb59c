"""Error taxonomy shared by services, adapters and commands.

Every error a user can cause or hit carries the exit code the CLI should
return. ``command_wrapper`` renders the message and exits with that code.
"""

from __future__ import annotations

from chomper.utils import exit_codes


class ChomperError(Exception):
    """Application error with exit code."""

    exit_code = exit_codes.ERROR_GENERAL

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class TaskValidationError(ChomperError):
    """Input rejected before any store call (empty title, missing due date...)."""

    exit_code = exit_codes.ERROR_INVALID_ARGS


class TaskNotFoundError(ChomperError):
    """A task reference did not match any loaded task."""

    exit_code = exit_codes.ERROR_NOT_FOUND


class StoreError(ChomperError):
    """The hosted table store rejected or failed a call."""

    exit_code = exit_codes.ERROR_NETWORK


class RecurrenceError(StoreError):
    """The successor of a recurring task could not be inserted.

    The predecessor is left incomplete when this is raised.
    """

    def __init__(self, message: str = "Failed to create next recurring task"):
        super().__init__(message)


class AuthError(ChomperError):
    """Not signed in, or the backend rejected the session."""

    exit_code = exit_codes.ERROR_AUTH_FAILURE

"""Tests for exit codes and the error taxonomy."""

import pytest

from chomper.utils import exit_codes
from chomper.utils.errors import (
    AuthError,
    ChomperError,
    RecurrenceError,
    StoreError,
    TaskNotFoundError,
    TaskValidationError,
)


@pytest.mark.parametrize(
    "error,code",
    [
        (ChomperError("x"), exit_codes.ERROR_GENERAL),
        (TaskValidationError("x"), exit_codes.ERROR_INVALID_ARGS),
        (AuthError("x"), exit_codes.ERROR_AUTH_FAILURE),
        (StoreError("x"), exit_codes.ERROR_NETWORK),
        (RecurrenceError(), exit_codes.ERROR_NETWORK),
        (TaskNotFoundError("x"), exit_codes.ERROR_NOT_FOUND),
    ],
)
def test_error_exit_codes(error, code):
    assert error.exit_code == code


def test_exit_code_override():
    assert ChomperError("x", exit_codes.ERROR_INVALID_ARGS).exit_code == 2


def test_recurrence_error_message():
    assert str(RecurrenceError()) == "Failed to create next recurring task"
    assert isinstance(RecurrenceError(), StoreError)


def test_names_and_descriptions():
    assert exit_codes.get_exit_code_name(exit_codes.ERROR_NOT_FOUND) == "ERROR_NOT_FOUND"
    assert exit_codes.get_exit_code_name(42) == "UNKNOWN(42)"
    assert exit_codes.get_exit_code_description(exit_codes.SUCCESS) == "Command executed successfully"
    assert exit_codes.get_exit_code_description(42) == "Unknown error"

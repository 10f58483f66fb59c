"""Fixtures for CLI command tests."""

from unittest.mock import patch

import pytest

from chomper.config import get_config_manager


@pytest.fixture
def signed_in():
    """Store a session so auth-required commands run."""
    get_config_manager().save_credentials(
        "access-123", user_id="user-1", email="chomp@example.com"
    )


@pytest.fixture
def cli_repo(memory_repo, signed_in):
    """Route the commands' task repository to the in-memory one."""
    with patch("chomper.commands.utils.RestApiTaskRepository", return_value=memory_repo):
        yield memory_repo

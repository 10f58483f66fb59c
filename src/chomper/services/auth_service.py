"""Service for handling authentication-related operations."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx

from chomper.api.auth import AuthAPI
from chomper.config import ConfigManager, get_config_manager
from chomper.models import User
from chomper.utils.errors import AuthError

logger = logging.getLogger(__name__)

NOT_LOGGED_IN_MESSAGE = "Not logged in. Use 'chomper login' to authenticate."


def _error_message(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    return data.get("error_description") or data.get("msg") or data.get("message")


@contextmanager
def auth_errors(action: str) -> Iterator[None]:
    """Translate httpx failures of an auth call into AuthError."""
    try:
        yield
    except httpx.HTTPStatusError as e:
        logger.error("%s failed: HTTP %s", action, e.response.status_code)
        detail = _error_message(e.response)
        message = f"{action} failed: {detail}" if detail else f"{action} failed"
        raise AuthError(message) from e
    except httpx.RequestError as e:
        logger.error("%s failed: %r", action, e)
        raise AuthError(f"{action} failed: could not reach the server") from e


class AuthService:
    """Service for handling authentication-related operations.

    The backend owns the real session; this service only keeps the tokens it
    handed out so later commands can act as the same user.
    """

    def __init__(self, config_manager: ConfigManager | None = None):
        self.config_manager = config_manager or get_config_manager()

    def current_user(self) -> User | None:
        """The signed-in user, or None."""
        credentials = self.config_manager.load_credentials()
        if not credentials or not credentials.get("user_id"):
            return None
        return User(id=credentials["user_id"], email=credentials.get("email"))

    def is_authenticated(self) -> bool:
        """Check if the user is authenticated."""
        return self.current_user() is not None

    def require_user(self) -> User:
        """The signed-in user.

        Raises:
            AuthError: If nobody is signed in
        """
        user = self.current_user()
        if user is None:
            raise AuthError(NOT_LOGGED_IN_MESSAGE)
        return user

    def _store_session(self, result: dict) -> User:
        token = result.get("access_token")
        user_data = result.get("user") or {}
        if not token or not user_data.get("id"):
            raise AuthError("Invalid response from server: no session received")

        user = User(id=user_data["id"], email=user_data.get("email"))
        self.config_manager.save_credentials(
            token,
            result.get("refresh_token"),
            user_id=user.id,
            email=user.email,
        )
        logger.info("signed in as %s", user.id)
        return user

    async def sign_in(self, auth_api: AuthAPI, email: str, password: str) -> User:
        """Sign in and remember the session."""
        with auth_errors("Login"):
            result = await auth_api.sign_in(email, password)
        return self._store_session(result)

    async def sign_up(
        self, auth_api: AuthAPI, email: str, password: str
    ) -> User | None:
        """Create an account.

        Returns:
            The signed-in user, or None when the backend asks for the email
            address to be confirmed first
        """
        with auth_errors("Signup"):
            result = await auth_api.sign_up(email, password)
        if result.get("access_token"):
            return self._store_session(result)
        logger.info("signed up %s, awaiting email confirmation", email)
        return None

    async def sign_out(self, auth_api: AuthAPI) -> None:
        """Revoke the session and forget it locally."""
        if self.config_manager.load_credentials():
            await auth_api.sign_out()
        self.config_manager.clear_credentials()
        logger.info("signed out")

    async def fetch_user(self, auth_api: AuthAPI) -> User:
        """Ask the backend who the stored session belongs to."""
        self.require_user()
        with auth_errors("Session check"):
            data = await auth_api.get_user()
        return User(id=data["id"], email=data.get("email"))

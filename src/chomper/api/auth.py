"""Authentication API endpoints."""

import logging

import httpx

from chomper.api.client import APIClient

logger = logging.getLogger(__name__)


class AuthAPI:
    """Authentication API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def sign_in(self, email: str, password: str) -> dict:
        """Sign in with email and password."""
        response = await self.client.post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            skip_auth=True,
        )
        return response.json()

    async def sign_up(self, email: str, password: str) -> dict:
        """Create an account."""
        response = await self.client.post(
            "/auth/v1/signup",
            json={"email": email, "password": password},
            skip_auth=True,
        )
        return response.json()

    async def sign_out(self) -> None:
        """Revoke the current session."""
        try:
            await self.client.post("/auth/v1/logout")
        except httpx.HTTPError as e:
            # The token may already be invalid; the local session is dropped anyway
            logger.warning("sign-out request failed: %s", e)

    async def get_user(self) -> dict:
        """Get the signed-in user."""
        response = await self.client.get("/auth/v1/user")
        return response.json()

"""Unit tests for AuthService."""

from unittest.mock import AsyncMock

import httpx
import pytest

from chomper.config import get_config_manager
from chomper.services.auth_service import AuthService
from chomper.utils.errors import AuthError

SESSION = {
    "access_token": "access-123",
    "refresh_token": "refresh-456",
    "user": {"id": "user-1", "email": "chomp@example.com"},
}


@pytest.fixture
def service():
    return AuthService(get_config_manager())


@pytest.fixture
def auth_api():
    return AsyncMock()


def _status_error(status: int, body: dict) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "http://test/auth/v1/token")
    response = httpx.Response(status, json=body, request=request)
    return httpx.HTTPStatusError("error", request=request, response=response)


def test_not_logged_in(service):
    assert service.current_user() is None
    assert service.is_authenticated() is False
    with pytest.raises(AuthError, match="Not logged in"):
        service.require_user()


@pytest.mark.asyncio
async def test_sign_in_stores_session(service, auth_api):
    auth_api.sign_in.return_value = SESSION

    user = await service.sign_in(auth_api, "chomp@example.com", "secret")

    assert user.id == "user-1"
    credentials = service.config_manager.load_credentials()
    assert credentials["token"] == "access-123"
    assert credentials["refresh_token"] == "refresh-456"
    assert service.current_user().email == "chomp@example.com"


@pytest.mark.asyncio
async def test_sign_in_rejected(service, auth_api):
    auth_api.sign_in.side_effect = _status_error(
        400, {"error": "invalid_grant", "error_description": "Invalid login credentials"}
    )

    with pytest.raises(AuthError, match="Invalid login credentials"):
        await service.sign_in(auth_api, "chomp@example.com", "wrong")
    assert service.current_user() is None


@pytest.mark.asyncio
async def test_sign_in_without_session(service, auth_api):
    auth_api.sign_in.return_value = {"user": {"id": "user-1"}}

    with pytest.raises(AuthError, match="no session"):
        await service.sign_in(auth_api, "chomp@example.com", "secret")


@pytest.mark.asyncio
async def test_sign_up_awaiting_confirmation(service, auth_api):
    auth_api.sign_up.return_value = {"id": "user-1", "email": "chomp@example.com"}

    assert await service.sign_up(auth_api, "chomp@example.com", "secret") is None
    assert service.current_user() is None


@pytest.mark.asyncio
async def test_sign_up_with_session(service, auth_api):
    auth_api.sign_up.return_value = SESSION

    user = await service.sign_up(auth_api, "chomp@example.com", "secret")

    assert user.id == "user-1"
    assert service.is_authenticated()


@pytest.mark.asyncio
async def test_sign_out_clears_credentials(service, auth_api):
    service.config_manager.save_credentials("tok", user_id="user-1")

    await service.sign_out(auth_api)

    auth_api.sign_out.assert_awaited_once()
    assert service.current_user() is None


@pytest.mark.asyncio
async def test_fetch_user(service, auth_api):
    service.config_manager.save_credentials("tok", user_id="user-1")
    auth_api.get_user.return_value = {"id": "user-1", "email": "chomp@example.com"}

    user = await service.fetch_user(auth_api)

    assert user.email == "chomp@example.com"


@pytest.mark.asyncio
async def test_fetch_user_network_error(service, auth_api):
    service.config_manager.save_credentials("tok", user_id="user-1")
    auth_api.get_user.side_effect = httpx.ConnectError("down")

    with pytest.raises(AuthError, match="could not reach the server"):
        await service.fetch_user(auth_api)

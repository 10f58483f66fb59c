"""API client for the hosted Chomper backend."""

from typing import Any, Optional

import httpx

from chomper.config import get_config_manager


class APIClient:
    """HTTP client for the backend's REST (``/rest/v1``) and auth (``/auth/v1``) APIs."""

    def __init__(
        self,
        profile: str = "default",
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config_manager = get_config_manager(profile)
        self.config = self.config_manager.config
        self.base_url = self.config.api.url.rstrip("/")
        self.anon_key = self.config.api.anon_key
        self.timeout = self.config.api.timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "APIClient":
        """Enter the async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the async context manager and ensure the client is closed."""
        await self.close()

    def _get_headers(self, skip_auth: bool = False) -> dict[str, str]:
        """Get HTTP headers with authentication.

        The project key always goes in ``apikey``. The bearer token is the
        signed-in user's access token, or the project key when signed out.
        """
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "apikey": self.anon_key,
        }

        token = None
        if not skip_auth:
            credentials = self.config_manager.load_credentials()
            if credentials and "token" in credentials:
                token = credentials["token"]

        headers["Authorization"] = f"Bearer {token or self.anon_key}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make an HTTP request to the backend.

        Failures are not retried; ``httpx.HTTPStatusError`` and
        ``httpx.RequestError`` propagate to the caller.
        """
        client = await self._get_client()
        url = f"{path}" if path.startswith("/") else f"/{path}"

        request_headers = self._get_headers(skip_auth=skip_auth)
        if headers:
            request_headers.update(headers)

        response = await client.request(
            method=method,
            url=url,
            json=json,
            params=params,
            headers=request_headers,
        )
        response.raise_for_status()
        return response

    async def get(
        self, path: str, *, params: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request(
            "POST", path, json=json, params=params, headers=headers, skip_auth=skip_auth
        )

    async def patch(
        self,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """Make a PATCH request."""
        return await self.request("PATCH", path, json=json, params=params)

    async def delete(
        self, path: str, *, params: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path, params=params)

"""HTTP client implementation for calls to the RentHive backend.

Conforms to BackendClientProtocol while using httpx for the actual HTTP
operations. Responses are returned raw; normalization happens in the
proxy dispatcher.
"""

from __future__ import annotations

from typing import Any

import httpx

from services.renthive_gateway.protocols import BackendClientProtocol


class RentHiveBackendClient(BackendClientProtocol):
    """Backend client that returns raw httpx.Response objects."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize the backend client.

        Args:
            client: The underlying httpx AsyncClient to use
        """
        self._client = client

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
    ) -> httpx.Response:
        """Send a request to the backend.

        Args:
            method: HTTP method, forwarded unchanged
            url: Absolute backend URL
            headers: HTTP headers to send (optional)
            json_body: JSON-serializable body; omitted when None

        Returns:
            Raw httpx Response object
        """
        return await self._client.request(
            method=method,
            url=url,
            headers=headers,
            json=json_body,
        )

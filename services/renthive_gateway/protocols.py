"""
Protocols for the RentHive Gateway.

Route handlers and the proxy dispatcher depend on these protocols, not on
concrete implementations.
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx
from prometheus_client import Counter, Histogram

from renthive_service_libs.auth import Identity


class BackendClientProtocol(Protocol):
    """Protocol for the outbound HTTP client talking to the RentHive backend."""

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
    ) -> httpx.Response:
        """Send a request and return the raw response."""
        ...


class TokenValidatorProtocol(Protocol):
    """Resolves a bearer token to an Identity, or None when it is not valid."""

    async def validate(self, token: str) -> Identity | None: ...


class MetricsProtocol(Protocol):
    """Protocol for metrics collection matching GatewayMetrics exactly."""

    @property
    def http_requests_total(self) -> Counter:
        """Total HTTP requests counter."""
        ...

    @property
    def http_request_duration_seconds(self) -> Histogram:
        """HTTP request duration histogram."""
        ...

    @property
    def downstream_service_calls_total(self) -> Counter:
        """Downstream service calls counter."""
        ...

    @property
    def downstream_service_call_duration_seconds(self) -> Histogram:
        """Downstream service call duration histogram."""
        ...

    @property
    def api_errors_total(self) -> Counter:
        """API errors counter."""
        ...

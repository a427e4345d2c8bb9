"""
Supabase access-token validation.

The validator answers one question: does this bearer token identify a live
Supabase session? It returns an ``Identity`` or ``None`` and never raises.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import httpx

from ..logging_utils import create_service_logger
from .identity import Identity

logger = create_service_logger("renthive.auth.token_validator")


class SupabaseTokenValidator:
    """Resolve bearer tokens through Supabase Auth ``get_user``.

    Pass either a ready ``client`` or a ``client_factory``. A factory is
    called on the first validation, so an unconfigured identity provider
    only affects requests that actually need it.
    """

    def __init__(
        self,
        client: Any = None,
        timeout_seconds: float = 5.0,
        *,
        client_factory: Callable[[], Any] | None = None,
    ) -> None:
        if client is None and client_factory is None:
            raise ValueError("Either client or client_factory is required")
        self._client = client
        self._client_factory = client_factory
        self._timeout_seconds = timeout_seconds

    def _get_client(self) -> Any:
        if self._client is None and self._client_factory is not None:
            self._client = self._client_factory()
        return self._client

    async def validate(self, token: str) -> Identity | None:
        if not token:
            return None

        try:
            client = self._get_client()
        except Exception as e:
            logger.error(
                "Identity provider client could not be created",
                reason="provider_unconfigured",
                error=str(e),
            )
            return None

        try:
            # SDK call is synchronous and can block indefinitely
            response = await asyncio.wait_for(
                asyncio.to_thread(client.auth.get_user, token),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Token validation timed out",
                reason="provider_timeout",
                timeout_seconds=self._timeout_seconds,
            )
            return None
        except (httpx.TransportError, ConnectionError, OSError) as e:
            logger.warning(
                "Identity provider unreachable",
                reason="provider_unavailable",
                error_type=type(e).__name__,
                error=str(e),
            )
            return None
        except Exception as e:
            logger.info(
                "Token rejected by identity provider",
                reason="provider_rejected",
                error_type=type(e).__name__,
                error=str(e),
            )
            return None

        user = getattr(response, "user", None) if response is not None else None
        if user is None:
            logger.info("Identity provider returned no user", reason="no_user")
            return None

        identity = Identity.from_supabase_user(user)
        logger.debug("Token validated", user_id=identity.id)
        return identity

"""
Auth gate placed in front of protected handlers.

Requires ``Authorization: Bearer <token>``, resolves the token through the
token validator and attaches the resulting identity to ``request.state``.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID, uuid4

from fastapi import Request

from ..error_handling import (
    RentHiveError,
    raise_authentication_error,
    raise_unknown_error,
)
from ..logging_utils import create_service_logger
from .identity import Identity

logger = create_service_logger("renthive.auth.gate")

BEARER_PREFIX = "Bearer "

TOKEN_REQUIRED_MESSAGE = "Authentication token is required"
TOKEN_INVALID_MESSAGE = "Invalid or expired authentication token"
GATE_FAILURE_MESSAGE = "Server error during authentication"


class TokenValidator(Protocol):
    async def validate(self, token: str) -> Identity | None: ...


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token after a case-sensitive ``Bearer `` prefix, else None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX) :]


class AuthGate:
    """Full validation gate: reject before the handler runs."""

    def __init__(self, validator: TokenValidator, service_name: str = "renthive") -> None:
        self._validator = validator
        self._service_name = service_name

    async def authenticate(self, request: Request) -> Identity:
        correlation_id: UUID = getattr(request.state, "correlation_id", None) or uuid4()

        try:
            token = extract_bearer_token(request.headers.get("Authorization"))
            if token is None:
                raise_authentication_error(
                    service=self._service_name,
                    operation="authenticate",
                    message=TOKEN_REQUIRED_MESSAGE,
                    correlation_id=correlation_id,
                    reason="missing_bearer_token",
                )

            identity = await self._validator.validate(token)
            if identity is None:
                raise_authentication_error(
                    service=self._service_name,
                    operation="authenticate",
                    message=TOKEN_INVALID_MESSAGE,
                    correlation_id=correlation_id,
                    reason="token_rejected",
                )
        except RentHiveError:
            raise
        except Exception as e:
            logger.error(
                "Unexpected error during authentication",
                error=str(e),
                correlation_id=str(correlation_id),
                exc_info=True,
            )
            raise_unknown_error(
                service=self._service_name,
                operation="authenticate",
                message=GATE_FAILURE_MESSAGE,
                correlation_id=correlation_id,
                error=str(e),
            )

        request.state.identity = identity
        logger.debug("Request authenticated", user_id=identity.id)
        return identity

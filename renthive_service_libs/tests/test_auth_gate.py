"""Tests for AuthGate: header parsing, validator outcomes and request state."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from starlette.requests import Request

from renthive_service_libs.auth import AuthGate, Identity, extract_bearer_token
from renthive_service_libs.error_handling import ErrorCode, RentHiveError


def _request(authorization: str | None = None) -> Request:
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode()))
    return Request({"type": "http", "method": "GET", "path": "/api/protected", "headers": headers})


@pytest.fixture
def identity() -> Identity:
    return Identity(id="user-123", email="tenant@example.com")


@pytest.fixture
def validator(identity: Identity) -> AsyncMock:
    mock = AsyncMock()
    mock.validate.return_value = identity
    return mock


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc", "abc"),
        ("Bearer ", ""),
        ("bearer abc", None),
        ("Basic abc", None),
        ("Bearerabc", None),
        (None, None),
        ("", None),
    ],
)
def test_extract_bearer_token(header: str | None, expected: str | None) -> None:
    assert extract_bearer_token(header) == expected


async def test_valid_token_attaches_identity(validator: AsyncMock, identity: Identity) -> None:
    gate = AuthGate(validator)
    request = _request("Bearer good-token")

    result = await gate.authenticate(request)

    assert result == identity
    assert request.state.identity == identity
    validator.validate.assert_awaited_once_with("good-token")


@pytest.mark.parametrize("header", [None, "Token good-token", "bearer good-token"])
async def test_missing_or_wrong_scheme_is_401(validator: AsyncMock, header: str | None) -> None:
    gate = AuthGate(validator)

    with pytest.raises(RentHiveError) as exc_info:
        await gate.authenticate(_request(header))

    error = exc_info.value
    assert error.status_code == 401
    assert error.error_detail.message == "Authentication token is required"
    validator.validate.assert_not_awaited()


async def test_expired_token_is_401(validator: AsyncMock) -> None:
    validator.validate.return_value = None
    gate = AuthGate(validator)

    with pytest.raises(RentHiveError) as exc_info:
        await gate.authenticate(_request("Bearer expired-token"))

    error = exc_info.value
    assert error.status_code == 401
    assert error.error_detail.message == "Invalid or expired authentication token"


async def test_unexpected_failure_is_500_with_cause(validator: AsyncMock) -> None:
    validator.validate.side_effect = RuntimeError("validator misconfigured")
    gate = AuthGate(validator)

    with pytest.raises(RentHiveError) as exc_info:
        await gate.authenticate(_request("Bearer good-token"))

    error = exc_info.value
    assert error.is_code(ErrorCode.UNKNOWN_ERROR)
    assert error.status_code == 500
    assert error.error_detail.message == "Server error during authentication"
    assert error.error_detail.details["error"] == "validator misconfigured"

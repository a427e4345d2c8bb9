"""Tests for the raise_* error factories."""

from __future__ import annotations

import uuid

import pytest

from renthive_service_libs.error_handling import (
    ErrorCode,
    RentHiveError,
    raise_authentication_error,
    raise_external_service_error,
    raise_missing_required_field,
    raise_unknown_error,
)

SERVICE = "renthive-gateway"


def test_raise_missing_required_field() -> None:
    correlation_id = uuid.uuid4()

    with pytest.raises(RentHiveError) as exc_info:
        raise_missing_required_field(
            service=SERVICE,
            operation="timeline_events_create",
            fields=["title"],
            message="Missing required fields: property_id, title, event_type, start_date",
            correlation_id=correlation_id,
        )

    error = exc_info.value
    assert error.is_code(ErrorCode.MISSING_REQUIRED_FIELD)
    assert error.status_code == 400
    assert error.error_detail.details["fields"] == ["title"]
    assert error.error_detail.correlation_id == correlation_id


def test_raise_authentication_error() -> None:
    with pytest.raises(RentHiveError) as exc_info:
        raise_authentication_error(
            service=SERVICE,
            operation="authenticate",
            message="Authentication required",
            correlation_id=uuid.uuid4(),
        )

    assert exc_info.value.status_code == 401
    assert exc_info.value.error_detail.message == "Authentication required"


def test_raise_external_service_error_relays_status() -> None:
    with pytest.raises(RentHiveError) as exc_info:
        raise_external_service_error(
            service=SERVICE,
            operation="users_lookup",
            external_service="renthive_backend",
            message="User not found",
            correlation_id=uuid.uuid4(),
            status_code=404,
        )

    error = exc_info.value
    assert error.status_code == 404
    assert error.error_detail.details["external_service"] == "renthive_backend"


def test_raise_external_service_error_without_status_defaults_to_502() -> None:
    with pytest.raises(RentHiveError) as exc_info:
        raise_external_service_error(
            service=SERVICE,
            operation="users_lookup",
            external_service="renthive_backend",
            message="Failed to lookup user",
            correlation_id=uuid.uuid4(),
        )

    assert exc_info.value.status_code == 502


def test_raise_unknown_error_captures_stack_inside_except() -> None:
    with pytest.raises(RentHiveError) as exc_info:
        try:
            raise ValueError("boom")
        except ValueError as e:
            raise_unknown_error(
                service=SERVICE,
                operation="dispatch",
                message=str(e),
                correlation_id=uuid.uuid4(),
            )

    error = exc_info.value
    assert error.status_code == 500
    assert error.error_detail.stack_trace is not None
    assert "ValueError: boom" in error.error_detail.stack_trace


def test_raise_unknown_error_outside_except_has_no_stack() -> None:
    with pytest.raises(RentHiveError) as exc_info:
        raise_unknown_error(
            service=SERVICE,
            operation="dispatch",
            message="unexpected",
            correlation_id=uuid.uuid4(),
        )

    assert exc_info.value.error_detail.stack_trace is None

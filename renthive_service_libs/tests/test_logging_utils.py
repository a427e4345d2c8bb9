"""Tests for logging_utils processors and request-context binding."""

from typing import Any

import pytest
from structlog.contextvars import get_contextvars

from renthive_service_libs.logging_utils import (
    add_service_context,
    bind_request_context,
    clear_request_context,
)


class TestAddServiceContext:
    """Tests for the add_service_context processor."""

    def test_adds_service_name_and_environment_from_env(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # Arrange
        monkeypatch.setenv("SERVICE_NAME", "renthive-gateway")
        monkeypatch.setenv("ENVIRONMENT", "production")
        event_dict: dict[str, Any] = {"event": "test message"}

        # Act
        result = add_service_context(None, "info", event_dict)

        # Assert
        assert result["service.name"] == "renthive-gateway"
        assert result["deployment.environment"] == "production"
        assert result["event"] == "test message"

    def test_defaults_when_env_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SERVICE_NAME", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)

        result = add_service_context(None, "info", {})

        assert result["service.name"] == "unknown"
        assert result["deployment.environment"] == "development"


class TestRequestContext:
    """Tests for contextvars-bound request context."""

    def teardown_method(self) -> None:
        clear_request_context()

    def test_bind_request_context_sets_fields(self) -> None:
        bind_request_context("abc-123", "GET", "/api/users/lookup", client="test")

        context = get_contextvars()
        assert context == {
            "correlation_id": "abc-123",
            "method": "GET",
            "path": "/api/users/lookup",
            "client": "test",
        }

    def test_bind_request_context_replaces_previous_request(self) -> None:
        bind_request_context("first", "GET", "/a", stale="yes")
        bind_request_context("second", "POST", "/b")

        context = get_contextvars()
        assert context["correlation_id"] == "second"
        assert "stale" not in context

    def test_clear_request_context(self) -> None:
        bind_request_context("abc-123", "GET", "/")

        clear_request_context()

        assert get_contextvars() == {}

"""Unit tests for ProxyDispatcher and the route table."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest
from prometheus_client import CollectorRegistry
from starlette.requests import Request

from renthive_service_libs.auth import Identity
from renthive_service_libs.error_handling import ErrorCode, RentHiveError
from services.renthive_gateway.app.metrics import GatewayMetrics
from services.renthive_gateway.models.requests import PropertyQuery, TimelineEventCreate
from services.renthive_gateway.proxy import (
    BackendBase,
    CredentialMode,
    ProxyDispatcher,
    ProxyRoute,
)
from services.renthive_gateway.routers.proxy_routes import PROXY_ROUTES
from services.renthive_gateway.tests.test_provider import (
    DEDICATED_BACKEND_URL,
    PUBLIC_BACKEND_URL,
    StaticTokenValidator,
    make_test_settings,
)


def _request(
    method: str = "GET",
    path: str = "/api/test",
    query: bytes = b"",
    headers: dict[str, str] | None = None,
    body: bytes = b"",
    path_params: dict[str, str] | None = None,
) -> Request:
    async def receive() -> dict:
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {
        "type": "http",
        "method": method,
        "scheme": "http",
        "server": ("test", 80),
        "root_path": "",
        "path": path,
        "query_string": query,
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "path_params": path_params or {},
    }
    return Request(scope, receive)


@pytest.fixture
def backend_client() -> AsyncMock:
    client = AsyncMock()
    client.request.return_value = httpx.Response(200, json={"ok": True})
    return client


@pytest.fixture
def validator() -> StaticTokenValidator:
    return StaticTokenValidator({"good-token": Identity(id="user-123")})


@pytest.fixture
def dispatcher(backend_client: AsyncMock, validator: StaticTokenValidator) -> ProxyDispatcher:
    return ProxyDispatcher(
        backend_client,
        validator,
        GatewayMetrics(registry=CollectorRegistry()),
        make_test_settings(),
    )


def _route(**overrides) -> ProxyRoute:
    fields = {
        "name": "test_route",
        "method": "GET",
        "path": "/things/{id}",
        "target": "/things/{id}",
        "failure_message": "Failed to fetch thing",
    }
    fields.update(overrides)
    return ProxyRoute(**fields)


class TestTargetResolution:
    async def test_public_base_with_path_params(
        self, dispatcher: ProxyDispatcher, backend_client: AsyncMock
    ) -> None:
        await dispatcher.dispatch(
            _route(), _request(headers={"Authorization": "Bearer t"}, path_params={"id": "a b"})
        )

        method, url = backend_client.request.await_args.args
        assert method == "GET"
        assert url == f"{PUBLIC_BACKEND_URL}/things/a%20b"

    async def test_dedicated_base_and_query_forwarding(
        self, dispatcher: ProxyDispatcher, backend_client: AsyncMock
    ) -> None:
        route = _route(base=BackendBase.DEDICATED, target="/api/things/{id}")

        await dispatcher.dispatch(
            route,
            _request(
                query=b"page=2",
                headers={"Authorization": "Bearer t"},
                path_params={"id": "7"},
            ),
        )

        _, url = backend_client.request.await_args.args
        assert url == f"{DEDICATED_BACKEND_URL}/api/things/7?page=2"

    def test_base_url_strips_trailing_slash(self, backend_client: AsyncMock) -> None:
        settings = make_test_settings()
        settings.PUBLIC_BACKEND_URL = "http://backend.test/api/"
        dispatcher = ProxyDispatcher(
            backend_client, StaticTokenValidator(), GatewayMetrics(CollectorRegistry()), settings
        )

        assert dispatcher.base_url(BackendBase.PUBLIC) == "http://backend.test/api"


class TestChecks:
    async def test_presence_mode_rejects_missing_header(
        self, dispatcher: ProxyDispatcher, backend_client: AsyncMock
    ) -> None:
        with pytest.raises(RentHiveError) as exc_info:
            await dispatcher.dispatch(_route(), _request(path_params={"id": "1"}))

        assert exc_info.value.status_code == 401
        assert exc_info.value.is_code(ErrorCode.AUTHENTICATION_ERROR)
        backend_client.request.assert_not_awaited()

    async def test_optional_mode_allows_missing_header(
        self, dispatcher: ProxyDispatcher, backend_client: AsyncMock
    ) -> None:
        route = _route(credential=CredentialMode.OPTIONAL)

        response = await dispatcher.dispatch(route, _request(path_params={"id": "1"}))

        assert response.status_code == 200
        headers = backend_client.request.await_args.kwargs["headers"]
        assert "Authorization" not in headers

    async def test_full_mode_requires_bearer_scheme(
        self,
        dispatcher: ProxyDispatcher,
        backend_client: AsyncMock,
        validator: StaticTokenValidator,
    ) -> None:
        route = _route(credential=CredentialMode.FULL)

        with pytest.raises(RentHiveError) as exc_info:
            await dispatcher.dispatch(
                route,
                _request(headers={"Authorization": "bearer good-token"}, path_params={"id": "1"}),
            )

        assert exc_info.value.status_code == 401
        assert validator.calls == []
        backend_client.request.assert_not_awaited()

    async def test_query_error_message(self, dispatcher: ProxyDispatcher) -> None:
        route = _route(
            path="/things",
            target="/things",
            query_model=PropertyQuery,
            query_error="Property ID is required",
        )

        with pytest.raises(RentHiveError) as exc_info:
            await dispatcher.dispatch(route, _request(query=b"propertyId="))

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_detail.message == "Property ID is required"

    async def test_missing_body_is_validation_failure(self, dispatcher: ProxyDispatcher) -> None:
        route = _route(
            method="POST",
            path="/events",
            target="/events",
            body_model=TimelineEventCreate,
            body_error="Missing required fields",
        )

        with pytest.raises(RentHiveError) as exc_info:
            await dispatcher.dispatch(
                route, _request(method="POST", headers={"Authorization": "x"})
            )

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_detail.message == "Missing required fields"


class TestNormalization:
    async def test_unwrap_only_when_flagged(
        self, dispatcher: ProxyDispatcher, backend_client: AsyncMock
    ) -> None:
        backend_client.request.return_value = httpx.Response(
            200, json={"success": True, "data": {"id": "1"}}
        )
        request_args = {"headers": {"Authorization": "Bearer t"}, "path_params": {"id": "1"}}

        plain = await dispatcher.dispatch(_route(), _request(**request_args))
        unwrapped = await dispatcher.dispatch(
            _route(unwrap_envelope=True), _request(**request_args)
        )

        assert plain.body == b'{"success":true,"data":{"id":"1"}}'
        assert unwrapped.body == b'{"id":"1"}'

    async def test_status_override_wins_over_backend_message(
        self, dispatcher: ProxyDispatcher, backend_client: AsyncMock
    ) -> None:
        backend_client.request.return_value = httpx.Response(401, json={"message": "jwt expired"})
        route = _route(status_messages={401: "Authentication required"})

        with pytest.raises(RentHiveError) as exc_info:
            await dispatcher.dispatch(
                route, _request(headers={"Authorization": "Bearer t"}, path_params={"id": "1"})
            )

        assert exc_info.value.status_code == 401
        assert exc_info.value.error_detail.message == "Authentication required"

    async def test_unparsable_success_body_is_unexpected_error(
        self, dispatcher: ProxyDispatcher, backend_client: AsyncMock
    ) -> None:
        backend_client.request.return_value = httpx.Response(200, text="<html>")

        with pytest.raises(RentHiveError) as exc_info:
            await dispatcher.dispatch(
                _route(), _request(headers={"Authorization": "Bearer t"}, path_params={"id": "1"})
            )

        assert exc_info.value.status_code == 500
        assert exc_info.value.is_code(ErrorCode.UNKNOWN_ERROR)


class TestRouteTable:
    def test_routes_are_unique(self) -> None:
        keys = [(route.method, route.path) for route in PROXY_ROUTES]

        assert len(keys) == len(set(keys))

    def test_names_are_unique(self) -> None:
        names = [route.name for route in PROXY_ROUTES]

        assert len(names) == len(set(names))

    def test_schemas_have_messages(self) -> None:
        for route in PROXY_ROUTES:
            if route.body_model is not None:
                assert route.body_error, route.name

    def test_routes_are_immutable(self) -> None:
        with pytest.raises(AttributeError):
            PROXY_ROUTES[0].target = "/elsewhere"  # type: ignore[misc]

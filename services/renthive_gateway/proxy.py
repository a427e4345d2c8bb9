"""
Authenticated proxy dispatcher for the RentHive Gateway.

Every gateway API route is described by an immutable ProxyRoute. A single
ProxyDispatcher executes them all:

1. query schema check (400 with the route's message)
2. credential check by mode (401 "Authentication required")
3. body schema check (400 with the route's message)
4. full token validation for FULL routes
5. forward to the backend with the Authorization header copied verbatim
6. normalize the backend response

The first failing step short-circuits; nothing is sent to the backend.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import quote
from uuid import UUID, uuid4

import httpx
from fastapi import Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ValidationError

from renthive_service_libs.auth import Identity, extract_bearer_token
from renthive_service_libs.error_handling import (
    RentHiveError,
    raise_authentication_error,
    raise_external_service_error,
    raise_missing_required_field,
    raise_unknown_error,
)
from renthive_service_libs.logging_utils import create_service_logger
from services.renthive_gateway.config import Settings
from services.renthive_gateway.protocols import (
    BackendClientProtocol,
    MetricsProtocol,
    TokenValidatorProtocol,
)

logger = create_service_logger("renthive_gateway.proxy")

AUTH_REQUIRED_MESSAGE = "Authentication required"
BACKEND_SERVICE = "renthive_backend"

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class CredentialMode(str, Enum):
    """How a route treats the inbound Authorization header."""

    # Forwarded when present, never required
    OPTIONAL = "optional"
    # Must be present; validity is left to the backend
    PRESENCE = "presence"
    # Must be present and validate through the token validator
    FULL = "full"


class BackendBase(str, Enum):
    DEDICATED = "dedicated"
    PUBLIC = "public"


@dataclass(frozen=True)
class ProxyCall:
    """Validated inputs of one inbound request."""

    path_params: Mapping[str, str]
    query: BaseModel | None = None
    body: Any = None
    identity: Identity | None = None


TargetResolver = Callable[[ProxyCall], str]
PayloadBuilder = Callable[[ProxyCall], Any]


@dataclass(frozen=True)
class ProxyRoute:
    """Declarative description of one proxied route.

    ``target`` is a backend path template filled from path parameters;
    ``resolve_target`` replaces it when the backend path depends on the query.
    ``failure_message`` may reference path parameters (``{id}``).
    """

    name: str
    method: str
    path: str
    target: str
    failure_message: str
    base: BackendBase = BackendBase.PUBLIC
    credential: CredentialMode = CredentialMode.PRESENCE
    query_model: type[BaseModel] | None = None
    query_error: str | None = None
    body_model: type[BaseModel] | None = None
    body_error: str | None = None
    status_messages: Mapping[int, str] = field(default_factory=dict)
    unwrap_envelope: bool = False
    forward_query: bool = True
    resolve_target: TargetResolver | None = None
    build_payload: PayloadBuilder | None = None


def _missing_fields(error: ValidationError) -> list[str]:
    return [".".join(str(part) for part in e["loc"]) or "__root__" for e in error.errors()]


class ProxyDispatcher:
    """Executes ProxyRoutes against the RentHive backend."""

    def __init__(
        self,
        backend_client: BackendClientProtocol,
        token_validator: TokenValidatorProtocol,
        metrics: MetricsProtocol,
        settings: Settings,
    ) -> None:
        self._client = backend_client
        self._validator = token_validator
        self._metrics = metrics
        self._settings = settings

    def base_url(self, base: BackendBase) -> str:
        if base is BackendBase.DEDICATED:
            return self._settings.BACKEND_URL.rstrip("/")
        return self._settings.PUBLIC_BACKEND_URL.rstrip("/")

    async def dispatch(self, route: ProxyRoute, request: Request) -> Response:
        correlation_id: UUID = getattr(request.state, "correlation_id", None) or uuid4()

        with self._metrics.http_request_duration_seconds.labels(
            method=route.method, endpoint=route.path
        ).time():
            try:
                response = await self._dispatch(route, request, correlation_id)
            except RentHiveError as e:
                self._record_request(route, e.status_code)
                self._metrics.api_errors_total.labels(
                    endpoint=route.path, error_type=e.error_code.lower()
                ).inc()
                raise
            except Exception as e:
                logger.error(
                    f"Unexpected error proxying {route.method} {route.path}: {e}",
                    route=route.name,
                    exc_info=True,
                )
                self._record_request(route, 500)
                self._metrics.api_errors_total.labels(
                    endpoint=route.path, error_type="unexpected_error"
                ).inc()
                raise_unknown_error(
                    service=self._settings.SERVICE_NAME,
                    operation=route.name,
                    message=str(e) or route.failure_message,
                    correlation_id=correlation_id,
                    error_type=type(e).__name__,
                )

        self._record_request(route, response.status_code)
        return response

    async def _dispatch(
        self, route: ProxyRoute, request: Request, correlation_id: UUID
    ) -> Response:
        query = self._validate_query(route, request, correlation_id)

        authorization = request.headers.get("Authorization")
        if route.credential is not CredentialMode.OPTIONAL and not authorization:
            raise_authentication_error(
                service=self._settings.SERVICE_NAME,
                operation=route.name,
                message=AUTH_REQUIRED_MESSAGE,
                correlation_id=correlation_id,
                reason="missing_authorization_header",
            )

        body = await self._read_json(route, request)
        self._validate_body(route, body, correlation_id)

        identity = None
        if route.credential is CredentialMode.FULL:
            identity = await self._validate_credential(route, authorization, correlation_id)

        call = ProxyCall(
            path_params=dict(request.path_params),
            query=query,
            body=body,
            identity=identity,
        )
        url = self._target_url(route, call, request)
        payload = route.build_payload(call) if route.build_payload else body

        headers = {
            "Content-Type": "application/json",
            "Cache-Control": "no-cache",
            "X-Correlation-ID": str(correlation_id),
        }
        if authorization:
            headers["Authorization"] = authorization

        logger.info(
            f"Proxying {route.method} request: {route.name}",
            target=url,
            credential_present=authorization is not None,
        )

        with self._metrics.downstream_service_call_duration_seconds.labels(
            service=BACKEND_SERVICE, method=route.method, endpoint=route.target
        ).time():
            backend_response = await self._client.request(
                route.method, url, headers=headers, json_body=payload
            )

        self._metrics.downstream_service_calls_total.labels(
            service=BACKEND_SERVICE,
            method=route.method,
            endpoint=route.target,
            status_code=str(backend_response.status_code),
        ).inc()

        return self._normalize(route, call, backend_response, correlation_id)

    def _validate_query(
        self, route: ProxyRoute, request: Request, correlation_id: UUID
    ) -> BaseModel | None:
        if route.query_model is None:
            return None
        try:
            return route.query_model.model_validate(dict(request.query_params))
        except ValidationError as e:
            raise_missing_required_field(
                service=self._settings.SERVICE_NAME,
                operation=route.name,
                fields=_missing_fields(e),
                message=route.query_error or "Invalid query parameters",
                correlation_id=correlation_id,
            )

    async def _read_json(self, route: ProxyRoute, request: Request) -> Any:
        if route.method not in _BODY_METHODS:
            return None
        raw = await request.body()
        if not raw.strip():
            return None
        # Malformed JSON is an unexpected failure, surfaced as 500
        return json.loads(raw)

    def _validate_body(self, route: ProxyRoute, body: Any, correlation_id: UUID) -> None:
        if route.body_model is None:
            return
        try:
            route.body_model.model_validate(body if body is not None else {})
        except ValidationError as e:
            raise_missing_required_field(
                service=self._settings.SERVICE_NAME,
                operation=route.name,
                fields=_missing_fields(e),
                message=route.body_error or "Invalid request body",
                correlation_id=correlation_id,
            )

    async def _validate_credential(
        self, route: ProxyRoute, authorization: str | None, correlation_id: UUID
    ) -> Identity:
        token = extract_bearer_token(authorization)
        identity = await self._validator.validate(token) if token else None
        if identity is None:
            raise_authentication_error(
                service=self._settings.SERVICE_NAME,
                operation=route.name,
                message=AUTH_REQUIRED_MESSAGE,
                correlation_id=correlation_id,
                reason="token_rejected",
            )
        return identity

    def _target_url(self, route: ProxyRoute, call: ProxyCall, request: Request) -> str:
        if route.resolve_target is not None:
            path = route.resolve_target(call)
        else:
            path = route.target.format_map(
                {key: quote(value, safe="/") for key, value in call.path_params.items()}
            )
        if route.forward_query and request.url.query:
            path = f"{path}?{request.url.query}"
        return f"{self.base_url(route.base)}{path}"

    def _normalize(
        self,
        route: ProxyRoute,
        call: ProxyCall,
        response: httpx.Response,
        correlation_id: UUID,
    ) -> Response:
        if response.is_success:
            if not response.content:
                return Response(status_code=response.status_code)
            data = response.json()
            if (
                route.unwrap_envelope
                and isinstance(data, dict)
                and data.get("success") is True
                and data.get("data") is not None
            ):
                data = data["data"]
            return JSONResponse(content=data, status_code=response.status_code)

        message = (
            route.status_messages.get(response.status_code)
            or _backend_error_message(response)
            or route.failure_message.format_map(dict(call.path_params))
        )
        logger.warning(
            f"Backend rejected {route.method} request: {route.name}",
            status_code=response.status_code,
            error_message=message,
        )
        raise_external_service_error(
            service=self._settings.SERVICE_NAME,
            operation=route.name,
            external_service=BACKEND_SERVICE,
            message=message,
            correlation_id=correlation_id,
            status_code=response.status_code,
        )

    def _record_request(self, route: ProxyRoute, status_code: int) -> None:
        self._metrics.http_requests_total.labels(
            method=route.method, endpoint=route.path, http_status=str(status_code)
        ).inc()


def _backend_error_message(response: httpx.Response) -> str | None:
    """``message`` then ``error`` from a JSON error body, when there is one."""
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    for key in ("message", "error"):
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return None

from __future__ import annotations

from collections.abc import AsyncIterator
from functools import partial

import httpx
from dishka import Provider, Scope, provide
from prometheus_client import REGISTRY, CollectorRegistry

from renthive_service_libs.auth import (
    AuthGate,
    SupabaseTokenValidator,
    create_admin_client,
    create_anon_client,
)
from services.renthive_gateway.app.metrics import GatewayMetrics
from services.renthive_gateway.config import Settings
from services.renthive_gateway.implementations.backend_client import RentHiveBackendClient
from services.renthive_gateway.protocols import (
    BackendClientProtocol,
    MetricsProtocol,
    TokenValidatorProtocol,
)
from services.renthive_gateway.proxy import ProxyDispatcher


class GatewayProvider(Provider):
    scope = Scope.APP

    def __init__(self, settings: Settings, registry: CollectorRegistry | None = None) -> None:
        super().__init__()
        self._settings = settings
        self._registry = registry

    @provide
    def get_config(self) -> Settings:
        return self._settings

    @provide
    async def get_http_client(self, config: Settings) -> AsyncIterator[BackendClientProtocol]:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(
                config.HTTP_CLIENT_TIMEOUT_SECONDS,
                connect=config.HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS,
            )
        ) as httpx_client:
            yield RentHiveBackendClient(httpx_client)

    @provide
    def get_token_validator(self, config: Settings) -> TokenValidatorProtocol:
        # Route-level validation runs with the session-scoped anon client
        return SupabaseTokenValidator(
            timeout_seconds=config.SUPABASE_AUTH_TIMEOUT_SECONDS,
            client_factory=partial(create_anon_client, config),
        )

    @provide
    def get_auth_gate(self, config: Settings) -> AuthGate:
        validator = SupabaseTokenValidator(
            timeout_seconds=config.SUPABASE_AUTH_TIMEOUT_SECONDS,
            client_factory=partial(create_admin_client, config),
        )
        return AuthGate(validator, service_name=config.SERVICE_NAME)

    @provide
    def get_proxy_dispatcher(
        self,
        backend_client: BackendClientProtocol,
        token_validator: TokenValidatorProtocol,
        metrics: MetricsProtocol,
        config: Settings,
    ) -> ProxyDispatcher:
        return ProxyDispatcher(backend_client, token_validator, metrics, config)

    @provide
    def provide_metrics(self, registry: CollectorRegistry) -> MetricsProtocol:
        return GatewayMetrics(registry=registry)

    @provide
    def provide_registry(self) -> CollectorRegistry:
        return self._registry if self._registry is not None else REGISTRY

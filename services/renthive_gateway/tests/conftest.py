"""
Shared fixtures for RentHive Gateway tests.

Apps are built with create_app() and a test dishka container, so routing,
middleware and error handlers are the production ones.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider
from httpx import ASGITransport, AsyncClient

from renthive_service_libs.auth import Identity
from renthive_service_libs.config import Environment
from services.renthive_gateway.app.auth_provider import AuthProvider
from services.renthive_gateway.app.main import create_app
from services.renthive_gateway.config import Settings
from services.renthive_gateway.tests.test_provider import (
    InfrastructureTestProvider,
    StaticTokenValidator,
    make_test_settings,
)

GOOD_TOKEN = "good-token"
AUTH_HEADERS = {"Authorization": f"Bearer {GOOD_TOKEN}"}


@pytest.fixture
def identity() -> Identity:
    return Identity(id="user-123", email="tenant@example.com", role="authenticated")


@pytest.fixture
def token_validator(identity: Identity) -> StaticTokenValidator:
    return StaticTokenValidator({GOOD_TOKEN: identity})


@pytest.fixture
def test_settings() -> Settings:
    return make_test_settings()


@pytest.fixture
async def container(
    test_settings: Settings, token_validator: StaticTokenValidator
) -> AsyncIterator[AsyncContainer]:
    container = make_async_container(
        InfrastructureTestProvider(settings=test_settings, token_validator=token_validator),
        AuthProvider(),
        FastapiProvider(),  # Required for Request context
    )
    yield container
    await container.close()


@pytest.fixture
async def client(test_settings: Settings, container: AsyncContainer) -> AsyncIterator[AsyncClient]:
    app = create_app(test_settings, container=container)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def dev_client(token_validator: StaticTokenValidator) -> AsyncIterator[AsyncClient]:
    """Client for an app running in development, where stack traces are exposed."""
    settings = make_test_settings(Environment.DEVELOPMENT)
    container = make_async_container(
        InfrastructureTestProvider(settings=settings, token_validator=token_validator),
        AuthProvider(),
        FastapiProvider(),
    )
    app = create_app(settings, container=container)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await container.close()

"""Startup setup for the RentHive Gateway."""

from __future__ import annotations

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
from prometheus_client import CollectorRegistry

from renthive_service_libs.logging_utils import configure_service_logging, create_service_logger
from services.renthive_gateway.app.auth_provider import AuthProvider
from services.renthive_gateway.app.di import GatewayProvider
from services.renthive_gateway.config import Settings

logger = create_service_logger("renthive_gateway.startup")


def configure_logging(settings: Settings) -> None:
    configure_service_logging(
        settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
    )


def create_di_container(
    settings: Settings, registry: CollectorRegistry | None = None
) -> AsyncContainer:
    """Create and configure the DI container for the given settings."""
    try:
        logger.info("Creating DI container...")
        container = make_async_container(
            GatewayProvider(settings, registry),
            AuthProvider(),
            FastapiProvider(),  # Provides Request object to context
        )
        logger.info("DI container created successfully")
        return container
    except Exception as e:
        logger.critical(f"Failed to create DI container: {e}", exc_info=True)
        raise


def setup_dependency_injection(app: FastAPI, container: AsyncContainer) -> None:
    """Setup Dishka integration with FastAPI."""
    try:
        logger.info("Setting up dependency injection...")
        setup_dishka(container, app)
        logger.info("Dependency injection setup completed")
    except Exception as e:
        logger.critical(f"Failed to setup dependency injection: {e}", exc_info=True)
        raise


async def shutdown_services(app: FastAPI) -> None:
    """Close the DI container, releasing the HTTP connection pool."""
    container = getattr(app.state, "di_container", None)
    if container is not None:
        await container.close()
    logger.info("RentHive Gateway shutdown completed")

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from renthive_service_libs.error_handling.fastapi import register_error_handlers
from services.renthive_gateway.app.startup_setup import (
    configure_logging,
    create_di_container,
    setup_dependency_injection,
    shutdown_services,
)
from services.renthive_gateway.config import Settings, settings

from ..routers import protected_routes, proxy_routes
from ..routers.health_routes import router as health_router
from .middleware import CorrelationIDMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    await shutdown_services(app)


def create_app(
    app_settings: Settings | None = None, container: AsyncContainer | None = None
) -> FastAPI:
    """Build the gateway app. Tests pass their own settings and DI container."""
    app_settings = app_settings or settings
    configure_logging(app_settings)

    docs_enabled = app_settings.is_development()
    app = FastAPI(
        title=app_settings.SERVICE_NAME,
        version="1.0.0",
        description="RentHive Gateway - authenticated proxy to the RentHive backend",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    register_error_handlers(app, expose_stack_traces=app_settings.expose_stack_traces())

    # Correlation ID must be early in chain
    app.add_middleware(CorrelationIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=app_settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=app_settings.CORS_ALLOW_METHODS,
        allow_headers=app_settings.CORS_ALLOW_HEADERS,
    )

    # Include routers
    app.include_router(health_router, tags=["Health"])
    app.include_router(proxy_routes.router, prefix="/api", tags=["Proxy"])
    app.include_router(protected_routes.router, prefix="/api", tags=["Protected"])

    # Setup Dishka DI
    if container is None:
        container = create_di_container(app_settings)
    setup_dependency_injection(app, container)

    # Store container reference for cleanup
    app.state.di_container = container

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.renthive_gateway.app.main:app",
        host=settings.HTTP_HOST,
        port=settings.HTTP_PORT,
        reload=settings.is_development(),
        log_level=settings.LOG_LEVEL.lower(),
    )

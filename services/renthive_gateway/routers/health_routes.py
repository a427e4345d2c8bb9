"""Health and metrics routes for the RentHive Gateway."""

from __future__ import annotations

from dishka import FromDishka
from dishka.integrations.fastapi import inject
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from renthive_service_libs.logging_utils import create_service_logger
from services.renthive_gateway.config import Settings

router = APIRouter(tags=["Health"])
logger = create_service_logger("renthive_gateway.routers.health")


@router.get("/healthz")
@inject
async def health_check(settings: FromDishka[Settings]) -> dict[str, str | dict]:
    """Report service status and the backend bases requests are proxied to."""
    logger.debug("Health check requested")
    return {
        "service": settings.SERVICE_NAME,
        "status": "healthy",
        "message": "RentHive Gateway is healthy",
        "version": "1.0.0",
        "dependencies": {
            "backend": {
                "dedicated_url": settings.BACKEND_URL,
                "public_url": settings.PUBLIC_BACKEND_URL,
                "note": "Backend availability checked on request",
            },
            "identity_provider": {
                "configured": bool(settings.SUPABASE_URL),
            },
        },
        "environment": settings.ENVIRONMENT.value,
    }


@router.get("/metrics", response_class=PlainTextResponse)
@inject
async def metrics(registry: FromDishka[CollectorRegistry]):
    """Prometheus metrics endpoint."""
    try:
        metrics_data = generate_latest(registry)
        return PlainTextResponse(content=metrics_data, media_type=CONTENT_TYPE_LATEST)
    except Exception as e:
        logger.error(f"Error generating metrics: {e}", exc_info=True)
        return PlainTextResponse(content="Error generating metrics", status_code=500)

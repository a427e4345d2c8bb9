"""Middleware for the RentHive Gateway."""

from uuid import UUID, uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from renthive_service_libs.logging_utils import (
    bind_request_context,
    clear_request_context,
    create_service_logger,
)

logger = create_service_logger("renthive_gateway.middleware")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Middleware to ensure every request has a correlation ID as UUID."""

    async def dispatch(self, request: Request, call_next):
        """Extract or generate correlation ID, store it and bind it to the log context."""
        x_correlation_id = request.headers.get("X-Correlation-ID")
        if x_correlation_id:
            try:
                correlation_id = UUID(x_correlation_id)
            except ValueError:
                logger.warning(
                    f"Invalid correlation ID format: {x_correlation_id}, generating new one"
                )
                correlation_id = uuid4()
        else:
            correlation_id = uuid4()

        request.state.correlation_id = correlation_id
        bind_request_context(str(correlation_id), request.method, request.url.path)

        try:
            response = await call_next(request)
        finally:
            clear_request_context()

        response.headers["X-Correlation-ID"] = str(correlation_id)

        return response

"""
FastAPI integration for RentHive structured errors.

Every error leaving a FastAPI app is rendered as an ErrorEnvelope so clients
see one schema regardless of which layer failed.
"""

from __future__ import annotations

import traceback
from uuid import UUID, uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..logging_utils import create_service_logger
from .error_models import ErrorEnvelope
from .renthive_error import RentHiveError

logger = create_service_logger("renthive.error_handling.fastapi")


def _correlation_id(request: Request) -> UUID:
    return getattr(request.state, "correlation_id", None) or uuid4()


def _envelope_response(status_code: int, envelope: ErrorEnvelope) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.to_response_body())


def register_error_handlers(app: FastAPI, expose_stack_traces: bool = False) -> None:
    """Register exception handlers that render the canonical error envelope.

    Args:
        app: FastAPI application
        expose_stack_traces: attach captured stack traces to 5xx bodies
            (development only)
    """

    @app.exception_handler(RentHiveError)
    async def handle_renthive_error(request: Request, exc: RentHiveError) -> JSONResponse:
        status_code = exc.status_code
        log = logger.error if status_code >= 500 else logger.warning
        log(
            "Request failed",
            error_code=exc.error_code,
            operation=exc.operation,
            status_code=status_code,
            error_message=exc.error_detail.message,
            correlation_id=exc.correlation_id,
        )
        envelope = ErrorEnvelope.from_error_detail(
            exc.error_detail, include_stack=expose_stack_traces
        )
        return _envelope_response(status_code, envelope)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        if location:
            message = f"{location}: {message}"
        envelope = ErrorEnvelope(
            error=message,
            message="Invalid request",
            correlation_id=str(_correlation_id(request)),
        )
        return _envelope_response(400, envelope)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        detail = str(exc.detail) if exc.detail else "Request failed"
        envelope = ErrorEnvelope(
            error=detail,
            message=detail,
            correlation_id=str(_correlation_id(request)),
        )
        return _envelope_response(exc.status_code, envelope)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        correlation_id = _correlation_id(request)
        logger.error(
            f"Unhandled exception: {exc}",
            correlation_id=str(correlation_id),
            exc_info=True,
        )
        message = str(exc) or "Internal server error"
        envelope = ErrorEnvelope(
            error=message,
            message=message,
            correlation_id=str(correlation_id),
            stack="".join(traceback.format_exception(exc)) if expose_stack_traces else None,
        )
        return _envelope_response(500, envelope)

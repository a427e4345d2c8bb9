"""
Factory functions that build an ErrorDetail and raise RentHiveError.

Every factory is typed ``NoReturn`` so call sites read as terminal statements.
"""

from __future__ import annotations

from typing import Any, NoReturn
from uuid import UUID

from .error_detail_factory import create_error_detail_with_context
from .error_enums import ErrorCode
from .renthive_error import RentHiveError


def _raise(
    error_code: ErrorCode,
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    capture_stack: bool = False,
    **details: Any,
) -> NoReturn:
    error_detail = create_error_detail_with_context(
        error_code=error_code,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details=details,
        capture_stack=capture_stack,
    )
    raise RentHiveError(error_detail)


def raise_unknown_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Unexpected local failure. Captures the active stack trace."""
    _raise(
        ErrorCode.UNKNOWN_ERROR,
        service,
        operation,
        message,
        correlation_id,
        capture_stack=True,
        **additional_context,
    )


def raise_authentication_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    _raise(
        ErrorCode.AUTHENTICATION_ERROR,
        service,
        operation,
        message,
        correlation_id,
        **additional_context,
    )


def raise_missing_required_field(
    service: str,
    operation: str,
    fields: list[str],
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    _raise(
        ErrorCode.MISSING_REQUIRED_FIELD,
        service,
        operation,
        message,
        correlation_id,
        fields=fields,
        **additional_context,
    )


def raise_external_service_error(
    service: str,
    operation: str,
    external_service: str,
    message: str,
    correlation_id: UUID,
    status_code: int | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Downstream rejected the call. ``status_code`` is relayed to the client as-is."""
    _raise(
        ErrorCode.EXTERNAL_SERVICE_ERROR,
        service,
        operation,
        message,
        correlation_id,
        external_service=external_service,
        status_code=status_code,
        **additional_context,
    )

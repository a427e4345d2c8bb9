"""Construction helpers for ErrorDetail."""

from __future__ import annotations

import traceback
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from .error_enums import ErrorCode
from .error_models import ErrorDetail


def create_error_detail_with_context(
    error_code: ErrorCode,
    message: str,
    service: str,
    operation: str,
    correlation_id: UUID,
    details: dict[str, Any] | None = None,
    capture_stack: bool = False,
) -> ErrorDetail:
    """Create an ErrorDetail, optionally capturing the active exception's stack.

    ``capture_stack`` only has an effect inside an ``except`` block; outside
    one there is no traceback to record.
    """
    stack_trace: str | None = None
    if capture_stack:
        formatted = traceback.format_exc()
        if formatted and formatted.strip() != "NoneType: None":
            stack_trace = formatted

    return ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id,
        timestamp=datetime.now(UTC),
        service=service,
        operation=operation,
        details=details or {},
        stack_trace=stack_trace,
    )

"""
renthive_service_libs.error_handling.error_enums - Centralized error code definitions.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # Identity
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"

    # Downstream
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


# Default HTTP status per error code. EXTERNAL_SERVICE_ERROR is overridden by
# the relayed downstream status stored in ErrorDetail.details["status_code"].
ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.UNKNOWN_ERROR: 500,
    ErrorCode.MISSING_REQUIRED_FIELD: 400,
    ErrorCode.AUTHENTICATION_ERROR: 401,
    ErrorCode.EXTERNAL_SERVICE_ERROR: 502,
}

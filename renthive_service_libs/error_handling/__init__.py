"""Structured error handling for RentHive services."""

from .error_detail_factory import create_error_detail_with_context
from .error_enums import ErrorCode
from .error_models import ErrorDetail, ErrorEnvelope
from .factories import (
    raise_authentication_error,
    raise_external_service_error,
    raise_missing_required_field,
    raise_unknown_error,
)
from .renthive_error import RentHiveError

__all__ = [
    "ErrorCode",
    "ErrorDetail",
    "ErrorEnvelope",
    "RentHiveError",
    "create_error_detail_with_context",
    "raise_authentication_error",
    "raise_external_service_error",
    "raise_missing_required_field",
    "raise_unknown_error",
]

"""
RentHiveError - the single exception type raised across service boundaries.

Wraps an ErrorDetail so handlers can render a consistent envelope without
inspecting exception subclasses.
"""

from __future__ import annotations

from .error_enums import ERROR_CODE_TO_HTTP_STATUS, ErrorCode
from .error_models import ErrorDetail


class RentHiveError(Exception):
    """Structured error carrying an ErrorDetail."""

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(f"[{error_detail.error_code.value}] {error_detail.message}")
        self.error_detail = error_detail

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    @property
    def status_code(self) -> int:
        """HTTP status for this error; relayed downstream failures keep their own status."""
        relayed = self.error_detail.details.get("status_code")
        if isinstance(relayed, int) and 300 <= relayed <= 599:
            return relayed
        return ERROR_CODE_TO_HTTP_STATUS.get(self.error_detail.error_code, 500)

    def is_code(self, code: ErrorCode) -> bool:
        return self.error_detail.error_code == code

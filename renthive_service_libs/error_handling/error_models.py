"""
Standardized error data models for RentHive services.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .error_enums import ErrorCode


class ErrorDetail(BaseModel):
    """
    The canonical, PURE data model for an error in RentHive services.
    This model contains only data fields and no behavior.
    """

    error_code: ErrorCode
    message: str
    correlation_id: UUID
    timestamp: datetime
    service: str
    operation: str
    details: dict[str, Any] = Field(default_factory=dict)
    stack_trace: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class ErrorEnvelope(BaseModel):
    """
    Client-facing error body returned by every RentHive HTTP surface.

    ``message`` is the human-readable summary; ``error`` carries the specific
    error text and equals ``message`` unless a more specific cause is known.
    ``stack`` is only populated in development.
    """

    success: bool = False
    error: str
    message: str
    correlation_id: str
    stack: Optional[str] = None

    @classmethod
    def from_error_detail(
        cls, error_detail: ErrorDetail, include_stack: bool = False
    ) -> "ErrorEnvelope":
        specific = error_detail.details.get("error")
        return cls(
            error=str(specific) if specific else error_detail.message,
            message=error_detail.message,
            correlation_id=str(error_detail.correlation_id),
            stack=error_detail.stack_trace if include_stack else None,
        )

    def to_response_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

"""
Request body and query schemas for proxied routes.

Schemas only check presence of the fields the backend needs; payloads are
forwarded as received unless a route builds its own.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator


def _present(value: Any) -> Any:
    if value is None or value == "":
        raise ValueError("field is required")
    return value


# Required and non-empty; any JSON type
Required = Annotated[Any, AfterValidator(_present)]


class _Schema(BaseModel):
    model_config = ConfigDict(extra="allow")


# Bodies


class AgreementTaskUpdate(_Schema):
    # taskIndex 0 is valid; only absence is rejected
    taskIndex: Any
    action: Required
    userId: Any = None


class AgreementCreate(_Schema):
    title: Required
    propertyId: Required
    checkItems: Required


class PropertyCreate(_Schema):
    name: Required
    postcode: Required


class InvitationAccept(_Schema):
    token: Required


class TimelineEventCreate(_Schema):
    property_id: Required
    title: Required
    event_type: Required
    start_date: Required


class UsageIncrement(_Schema):
    feature: Required
    userId: Any = None


class CalendarEvents(_Schema):
    events: list[Any] = Field(min_length=1)


class ImageDelete(_Schema):
    imagePath: Required


# Queries


class PropertyQuery(BaseModel):
    propertyId: Required


class PropertyUserQuery(BaseModel):
    propertyId: Required
    userId: Required


class UserLookupQuery(BaseModel):
    email: str | None = None
    id: str | None = None

    @model_validator(mode="after")
    def require_email_or_id(self) -> "UserLookupQuery":
        if not self.email and not self.id:
            raise ValueError("either email or id is required")
        return self


class TimelineAllQuery(BaseModel):
    days: str | None = None


class ContractSummariesQuery(BaseModel):
    userId: str | None = None
    limit: str = "10"
    offset: str = "0"


class FeatureQuery(BaseModel):
    feature: Required

"""Identity domain model shared by the auth gate and gateway routes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Identity(BaseModel):
    """A user resolved from a Supabase access token."""

    id: str
    email: str | None = None
    role: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    app_metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_supabase_user(cls, user: Any) -> "Identity":
        """Build from the SDK's ``User`` object (attribute access, not a dict)."""
        return cls(
            id=str(user.id),
            email=getattr(user, "email", None),
            role=getattr(user, "role", None),
            user_metadata=getattr(user, "user_metadata", None) or {},
            app_metadata=getattr(user, "app_metadata", None) or {},
        )

    def public_profile(self) -> dict[str, Any]:
        """Fields safe to echo back to a client."""
        return {"id": self.id, "email": self.email}

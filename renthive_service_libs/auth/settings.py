"""Identity-provider (Supabase) settings mixin."""

from __future__ import annotations

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings


class IdentityProviderSettings(BaseSettings):
    """Supabase connection settings.

    Two keys are kept apart on purpose: the anon key backs session-scoped
    clients, the service-role key backs admin clients. Both accept the
    ``NEXT_PUBLIC_*`` names the frontend deploys with.
    """

    SUPABASE_URL: str = Field(
        default="",
        description="Supabase project URL",
        validation_alias=AliasChoices("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
    )
    SUPABASE_ANON_KEY: SecretStr = Field(
        default=SecretStr(""),
        description="Supabase anon (public) key",
        validation_alias=AliasChoices("SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY"),
    )
    SUPABASE_SERVICE_ROLE_KEY: SecretStr = Field(
        default=SecretStr(""),
        description="Supabase service-role key (admin privileges, server-side only)",
        validation_alias=AliasChoices("SUPABASE_SERVICE_ROLE_KEY"),
    )
    SUPABASE_AUTH_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        description="Upper bound for a single get-user call to Supabase Auth",
        validation_alias=AliasChoices("SUPABASE_AUTH_TIMEOUT_SECONDS", "SUPABASE_AUTH_TIMEOUT"),
    )

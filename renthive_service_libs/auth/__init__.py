"""Supabase-backed authentication for RentHive services."""

from .gate import AuthGate, extract_bearer_token
from .identity import Identity
from .settings import IdentityProviderSettings
from .supabase_clients import (
    AdminSupabaseClient,
    AnonSupabaseClient,
    create_admin_client,
    create_anon_client,
)
from .token_validator import SupabaseTokenValidator

__all__ = [
    "AdminSupabaseClient",
    "AnonSupabaseClient",
    "AuthGate",
    "Identity",
    "IdentityProviderSettings",
    "SupabaseTokenValidator",
    "create_admin_client",
    "create_anon_client",
    "extract_bearer_token",
]

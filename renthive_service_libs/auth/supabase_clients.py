"""
Explicit construction of Supabase clients.

Clients are built on first use by the token validators that need them; no
module-level client instances exist.
"""

from __future__ import annotations

from typing import NewType

from supabase import Client, ClientOptions, create_client

from ..logging_utils import create_service_logger
from .settings import IdentityProviderSettings

logger = create_service_logger("renthive.auth.supabase_clients")

# Distinct types so the DI container can provide both side by side
AnonSupabaseClient = NewType("AnonSupabaseClient", Client)
AdminSupabaseClient = NewType("AdminSupabaseClient", Client)


def _create_client(url: str, key: str, purpose: str) -> Client:
    if not url or not key:
        logger.error(
            "Supabase settings incomplete",
            purpose=purpose,
            url_configured=bool(url),
            key_configured=bool(key),
        )
        raise ValueError(f"Supabase {purpose} client requires SUPABASE_URL and its key")
    logger.info("Creating Supabase client", purpose=purpose)
    return create_client(
        url,
        key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )


def create_anon_client(settings: IdentityProviderSettings) -> AnonSupabaseClient:
    """Session-scoped client backed by the anon key."""
    client = _create_client(
        settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY.get_secret_value(), "anon"
    )
    return AnonSupabaseClient(client)


def create_admin_client(settings: IdentityProviderSettings) -> AdminSupabaseClient:
    """Admin client backed by the service-role key."""
    client = _create_client(
        settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY.get_secret_value(), "admin"
    )
    return AdminSupabaseClient(client)

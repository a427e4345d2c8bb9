"""
Configuration for the RentHive Gateway.

Uses Pydantic settings for environment-based configuration. Backend and
Supabase locations also accept the unprefixed names the frontend
deployment already defines.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from renthive_service_libs.auth import IdentityProviderSettings
from renthive_service_libs.config import Environment, SecureServiceSettings


class Settings(SecureServiceSettings, IdentityProviderSettings):
    """Configuration settings for the RentHive Gateway."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RENTHIVE_GATEWAY_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Service identity
    SERVICE_NAME: str = "renthive-gateway"

    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",
        description="Runtime environment for the service",
    )

    # HTTP server configuration
    HTTP_HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    HTTP_PORT: int = Field(default=3000, description="HTTP server port")

    # Logging configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # CORS configuration for the RentHive web frontend
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=True, description="Allow credentials in CORS requests"
    )
    CORS_ALLOW_METHODS: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        description="Allowed HTTP methods for CORS",
    )
    CORS_ALLOW_HEADERS: list[str] = Field(
        default=["*"], description="Allowed headers for CORS requests"
    )

    # HTTP Client Timeouts
    HTTP_CLIENT_TIMEOUT_SECONDS: int = 30
    HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS: int = 10

    # Backend bases. BACKEND_URL is the bare host; PUBLIC_BACKEND_URL already ends in /api
    BACKEND_URL: str = Field(
        default="http://localhost:3001",
        description="Dedicated backend base URL (paths carry their own /api prefix)",
        validation_alias=AliasChoices("RENTHIVE_GATEWAY_BACKEND_URL", "BACKEND_URL"),
    )
    PUBLIC_BACKEND_URL: str = Field(
        default="http://localhost:3001/api",
        description="Public backend API base URL",
        validation_alias=AliasChoices(
            "RENTHIVE_GATEWAY_PUBLIC_BACKEND_URL",
            "NEXT_PUBLIC_BACKEND_URL",
            "PUBLIC_BACKEND_URL",
        ),
    )


# Global settings instance
settings = Settings()

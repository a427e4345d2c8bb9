"""Base settings class shared by RentHive services."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from .enums import Environment


class SecureServiceSettings(BaseSettings):
    """Environment-aware base settings.

    Services subclass this and add their own ``model_config`` (env prefix,
    env file) and fields. ``ENVIRONMENT`` is always read from the global
    ``ENVIRONMENT`` variable so every service agrees on where it runs.
    """

    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",
        description="Runtime environment for the service",
    )

    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION

    def expose_stack_traces(self) -> bool:
        """Stack traces are only ever attached to error responses in development."""
        return self.is_development()

"""
RentHive Service Libraries Package.

Shared infrastructure for RentHive Python services: environment-aware
settings, structured logging, structured error handling and the Supabase
token-validation gate.
"""

from .logging_utils import configure_service_logging, create_service_logger

__all__ = [
    "configure_service_logging",
    "create_service_logger",
]

# Framework-specific pieces should be imported directly from:
# - renthive_service_libs.error_handling.fastapi
# - renthive_service_libs.auth

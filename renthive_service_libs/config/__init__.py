"""Configuration utilities for RentHive services."""

from .enums import Environment
from .secure_base import SecureServiceSettings

__all__ = ["Environment", "SecureServiceSettings"]

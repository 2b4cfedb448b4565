"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    CallbagsSettings,
    LoggingSettings,
    ProtocolSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "CallbagsSettings",
    "LoggingSettings",
    "ProtocolSettings",
    "clear_settings_cache",
    "get_settings",
]

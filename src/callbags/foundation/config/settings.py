"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from callbags.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'INFO'
    >>> settings.protocol.log_violations
    False
    
    # Or with environment variables:
    # CALLBAGS_LOG_LEVEL=DEBUG
    # CALLBAGS_PROTOCOL_LOG_LIFECYCLE=true
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="CALLBAGS_LOG_",
        extra="ignore",
    )
    
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"
    include_timestamps: bool = True


class ProtocolSettings(BaseSettings):
    """Diagnostics for the signal protocol itself."""
    
    model_config = SettingsConfigDict(
        env_prefix="CALLBAGS_PROTOCOL_",
        extra="ignore",
    )
    
    log_violations: bool = Field(
        default=False,
        description="Log signals dropped because they arrived before greet or after END",
    )
    log_lifecycle: bool = Field(
        default=False,
        description="Log subscribe/switch/cancel transitions of share, flatten, take and concat",
    )


class CallbagsSettings(BaseSettings):
    """Root settings for the callbags package.
    
    Loads configuration from environment variables with CALLBAGS_ prefix.
    Supports nested configuration and .env files.
    
    Example environment variables:
        CALLBAGS_DEBUG=true
        CALLBAGS_LOG_LEVEL=DEBUG
        CALLBAGS_LOG_FORMAT=json
        CALLBAGS_PROTOCOL_LOG_VIOLATIONS=true
    """
    
    model_config = SettingsConfigDict(
        env_prefix="CALLBAGS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )
    
    debug: bool = Field(default=False, description="Enable debug mode (turns on all protocol diagnostics)")
    
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    protocol: ProtocolSettings = Field(default_factory=ProtocolSettings)
    
    @computed_field
    @property
    def trace_lifecycle(self) -> bool:
        """Whether operators should log their lifecycle transitions."""
        return self.debug or self.protocol.log_lifecycle
    
    @computed_field
    @property
    def trace_violations(self) -> bool:
        """Whether dropped out-of-protocol signals should be logged."""
        return self.debug or self.protocol.log_violations


@lru_cache(maxsize=1)
def get_settings() -> CallbagsSettings:
    """Get the global settings instance (cached).
    
    Example:
        >>> settings = get_settings()
        >>> settings.debug
        False
    """
    return CallbagsSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).
    
    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()

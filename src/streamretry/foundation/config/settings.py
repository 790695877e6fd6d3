"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated defaults for retry behavior and logging,
read from environment variables with the STREAMRETRY_ prefix.

Example:
    >>> from streamretry.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.retry.max_attempts
    3
    >>> settings.logging.level
    'INFO'
    
    # Or with environment variables:
    # STREAMRETRY_RETRY_MAX_ATTEMPTS=5
    # STREAMRETRY_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, NonNegativeFloat, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrySettings(BaseSettings):
    """Default retry configuration applied when call sites omit options."""
    
    model_config = SettingsConfigDict(
        env_prefix="STREAMRETRY_RETRY_",
        extra="ignore",
    )
    
    max_attempts: PositiveInt = Field(default=3, description="Total attempts including the first")
    base_delay_ms: NonNegativeFloat = Field(default=1000.0, description="Backoff base in milliseconds")
    max_delay_ms: NonNegativeFloat = Field(default=10000.0, description="Backoff ceiling in milliseconds")
    retry_all_errors: bool = Field(default=False, description="Retry non rate-limit errors too")


class LoggingSettings(BaseSettings):
    """Logging configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="STREAMRETRY_LOG_",
        extra="ignore",
    )
    
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "text"
    
    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class StreamRetrySettings(BaseSettings):
    """Root settings for streamretry.
    
    Example environment variables:
        STREAMRETRY_RETRY_MAX_ATTEMPTS=5
        STREAMRETRY_RETRY_RETRY_ALL_ERRORS=true
        STREAMRETRY_LOG_FORMAT=json
    """
    
    model_config = SettingsConfigDict(
        env_prefix="STREAMRETRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )
    
    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> StreamRetrySettings:
    """Get the global settings instance (cached)."""
    return StreamRetrySettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).
    
    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()

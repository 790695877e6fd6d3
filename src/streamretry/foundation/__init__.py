"""Foundation - Core building blocks for streamretry.

Contains: error classification, config.
"""

from __future__ import annotations

from .config import (
    LoggingSettings,
    RetrySettings,
    StreamRetrySettings,
    clear_settings_cache,
    get_settings,
)
from .errors import (
    RETRY_HINT_HEADERS,
    ClassifiedError,
    ErrorKind,
    RateLimitError,
    RetryHint,
    classify_exception,
    extract_retry_hint,
    is_rate_limit,
)

__all__ = [
    # Errors
    "ErrorKind", "ClassifiedError", "RetryHint", "RateLimitError", "RETRY_HINT_HEADERS",
    "classify_exception", "extract_retry_hint", "is_rate_limit",
    # Config
    "StreamRetrySettings", "RetrySettings", "LoggingSettings", "get_settings", "clear_settings_cache",
]

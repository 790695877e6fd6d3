"""Error classification for streamretry.

- ErrorKind: RATE_LIMITED or OTHER
- ClassifiedError: Kind, status and retry hint derived from an exception
- RetryHint: Delta-seconds or epoch-seconds instruction from response headers
- RateLimitError: Ready-made 429 exception for producers
"""

from .errors import (
    RATE_LIMIT_STATUS,
    ErrorKind,
    RateLimitError,
    classify_exception,
    extract_retry_hint,
    is_rate_limit,
)
from .types import RETRY_HINT_HEADERS, ClassifiedError, HeaderLookup, RetryHint, parse_int_prefix

__all__ = [
    "RATE_LIMIT_STATUS", "RETRY_HINT_HEADERS",
    "ErrorKind", "ClassifiedError", "RetryHint", "HeaderLookup",
    "RateLimitError",
    "classify_exception", "extract_retry_hint", "is_rate_limit", "parse_int_prefix",
]

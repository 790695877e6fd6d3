"""streamretry - Transparent retry-with-backoff for streaming producers.

Wraps a function that yields values incrementally and may fail partway
through (typically with HTTP 429). On a retryable failure the producer is
restarted from scratch after waiting as long as the server's retry hint
says, or with capped exponential backoff when there is no hint.

Quick Start (Decorator):
    >>> from streamretry import with_retry
    >>>
    >>> @with_retry(max_attempts=3)
    ... async def stream_completion(prompt: str):
    ...     async for chunk in api.stream(prompt):
    ...         yield chunk
    >>>
    >>> async for chunk in stream_completion("hello"):
    ...     print(chunk, end="")

Explicit Executor:
    >>> from streamretry import RetryConfig, RetryingStreamExecutor
    >>>
    >>> executor = RetryingStreamExecutor(RetryConfig(retry_all_errors=True))
    >>> async for chunk in executor.execute(api.stream, "hello"):
    ...     ...

Rate-limit detection is structural: an exception with ``status_code`` (or
``status``, or ``response.status_code``) equal to 429. Retry hints are read
from ``retry-after``, ``x-ratelimit-reset`` and ``ratelimit-reset`` headers,
in that order. Values already yielded by a failed attempt are not
retracted: the consumer sees every attempt's output in sequence.
"""

from __future__ import annotations

from .core import with_retry, wrap
from .foundation.config import (
    LoggingSettings,
    RetrySettings,
    StreamRetrySettings,
    clear_settings_cache,
    get_settings,
)
from .foundation.errors import (
    RETRY_HINT_HEADERS,
    ClassifiedError,
    ErrorKind,
    RateLimitError,
    RetryHint,
    classify_exception,
    extract_retry_hint,
)
from .runtime.observability import configure_logging, get_logger
from .runtime.retry import (
    Backoff,
    ExponentialBackoff,
    RetryConfig,
    RetryingStreamExecutor,
    compute_delay,
    execute,
    execute_sync,
    should_retry,
)

__version__ = "0.1.0"

__all__ = [
    # Attachment
    "with_retry", "wrap",
    # Execution
    "RetryingStreamExecutor", "execute", "execute_sync",
    # Policy
    "RetryConfig", "should_retry", "compute_delay", "Backoff", "ExponentialBackoff",
    # Errors
    "ErrorKind", "ClassifiedError", "RetryHint", "RateLimitError", "RETRY_HINT_HEADERS",
    "classify_exception", "extract_retry_hint",
    # Config
    "StreamRetrySettings", "RetrySettings", "LoggingSettings", "get_settings", "clear_settings_cache",
    # Logging
    "configure_logging", "get_logger",
]

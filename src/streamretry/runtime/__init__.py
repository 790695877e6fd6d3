"""Runtime - Execution concerns for streamretry.

Contains: retry execution, observability.
"""

from __future__ import annotations

from .observability import configure_logging, get_logger
from .retry import (
    Backoff,
    ExponentialBackoff,
    RetryConfig,
    RetryingStreamExecutor,
    compute_delay,
    execute,
    execute_sync,
    should_retry,
)

__all__ = [
    # Retry
    "RetryConfig", "RetryingStreamExecutor", "Backoff", "ExponentialBackoff",
    "should_retry", "compute_delay", "execute", "execute_sync",
    # Observability
    "configure_logging", "get_logger",
]

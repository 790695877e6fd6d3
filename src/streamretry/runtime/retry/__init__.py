"""Retry-with-backoff for streaming producers.

Restarts a producer from scratch when it fails with a rate-limit error
(or any error, when configured), waiting either as long as the server's
retry hint says or with capped exponential backoff.

Example:
    >>> from streamretry.runtime.retry import RetryConfig, RetryingStreamExecutor
    >>> 
    >>> executor = RetryingStreamExecutor(RetryConfig(max_attempts=5, base_delay_ms=500))
    >>> async for chunk in executor.execute(client.stream_completion, prompt):
    ...     handle(chunk)
"""

from .backoff import Backoff, ExponentialBackoff
from .executor import OnRetry, RetryingStreamExecutor, execute, execute_sync
from .policy import RetryConfig, compute_delay, should_retry

__all__ = [
    # Backoff
    "Backoff",
    "ExponentialBackoff",
    # Policy
    "RetryConfig",
    "should_retry",
    "compute_delay",
    # Execution
    "RetryingStreamExecutor",
    "OnRetry",
    "execute",
    "execute_sync",
]

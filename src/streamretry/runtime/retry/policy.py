"""Retry configuration, decision and delay computation.

Everything here is synchronous and pure: given the same exception, attempt
index, config and current time, the same answer comes back.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, NonNegativeFloat, PositiveInt

from streamretry.foundation.config import get_settings
from streamretry.foundation.errors import extract_retry_hint, is_rate_limit

from .backoff import ExponentialBackoff

if TYPE_CHECKING:
    from streamretry.foundation.config import RetrySettings


class RetryConfig(BaseModel):
    """Immutable retry configuration.
    
    Attributes:
        max_attempts: Total attempts including the first
        base_delay_ms: Backoff base in milliseconds
        max_delay_ms: Backoff ceiling in milliseconds
        retry_all_errors: When False, only rate-limit (429) errors are retried
    
    ``base_delay_ms <= max_delay_ms`` is expected but not enforced; the
    exponential delay is always clamped to ``max_delay_ms``.
    
    Example:
        >>> RetryConfig(max_attempts=5, retry_all_errors=True)
        >>> RetryConfig.resolve(base_delay_ms=250)  # merged over defaults
    """
    
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        revalidate_instances="never",
        json_schema_extra={
            "title": "Retry Config",
            "description": "Retry-with-backoff configuration for streaming producers",
            "examples": [{
                "max_attempts": 3,
                "base_delay_ms": 1000,
                "max_delay_ms": 10000,
                "retry_all_errors": False,
            }],
        },
    )
    
    max_attempts: PositiveInt = 3
    base_delay_ms: NonNegativeFloat = 1000.0
    max_delay_ms: NonNegativeFloat = 10000.0
    retry_all_errors: bool = False
    
    @property
    def backoff(self) -> ExponentialBackoff:
        return ExponentialBackoff(base=self.base_delay_ms, max_delay=self.max_delay_ms)
    
    @classmethod
    def from_settings(cls, settings: RetrySettings | None = None) -> RetryConfig:
        """Build from environment-driven defaults."""
        s = settings or get_settings().retry
        return cls(
            max_attempts=s.max_attempts,
            base_delay_ms=s.base_delay_ms,
            max_delay_ms=s.max_delay_ms,
            retry_all_errors=s.retry_all_errors,
        )
    
    @classmethod
    def resolve(cls, config: RetryConfig | None = None, **options: object) -> RetryConfig:
        """Merge call-site options over ``config`` (or the configured defaults).
        
        Unknown option names and invalid values raise ValidationError.
        """
        base = config if config is not None else cls.from_settings()
        if not options:
            return base
        return cls.model_validate({**base.model_dump(), **options})
    
    def is_last_attempt(self, attempt: int) -> bool:
        return attempt == self.max_attempts - 1


def should_retry(exc: BaseException, attempt: int, config: RetryConfig) -> bool:
    """Decide whether a failure on ``attempt`` (0-indexed) leads to another attempt."""
    if config.is_last_attempt(attempt):
        return False
    return config.retry_all_errors or is_rate_limit(exc)


def compute_delay(
    exc: BaseException,
    attempt: int,
    config: RetryConfig,
    *,
    now: float | None = None,
) -> float:
    """Compute the delay in milliseconds before the attempt after ``attempt``.
    
    A retry hint in the exception's headers wins: values in the future
    (compared to ``now`` in epoch seconds) are absolute timestamps, anything
    else is delta-seconds. Without a hint, exponential backoff on the
    current attempt index applies, capped at ``max_delay_ms``.
    
    The result may be zero or negative for hints that have already elapsed;
    callers clamp the actual sleep, not this value.
    """
    if (hint := extract_retry_hint(exc)) is not None:
        return hint.delay_ms(time.time() if now is None else now)
    return config.backoff.delay(attempt)

"""Backoff strategies for retry delays.

Delays are expressed in milliseconds. Only plain exponential backoff is
provided; there is no jitter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Backoff(Protocol):
    """Protocol for backoff delay calculation.
    
    Attempt numbers are 0-indexed (first attempt = attempt 0).
    """
    
    def delay(self, attempt: int) -> float:
        """Calculate delay in milliseconds after the given attempt failed.
        
        Args:
            attempt: 0-indexed attempt number that just failed
            
        Returns:
            Delay in milliseconds before the next attempt
        """
        ...


@dataclass(frozen=True, slots=True)
class ExponentialBackoff:
    """Exponential backoff capped above.
    
    Delay = min(base * (multiplier ^ attempt), max_delay)
    
    Attributes:
        base: Initial delay in milliseconds (default: 1000)
        max_delay: Maximum delay cap in milliseconds (default: 10000)
        multiplier: Exponential growth factor (default: 2.0)
    """
    
    base: float = 1000.0
    max_delay: float = 10000.0
    multiplier: float = 2.0
    
    def delay(self, attempt: int) -> float:
        try:
            grown = self.base * (self.multiplier ** attempt)
        except OverflowError:
            return float(self.max_delay)
        return float(min(grown, self.max_delay))

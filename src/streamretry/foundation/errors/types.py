"""Retry hints and classified errors.

Both are derived from a raised exception at the moment it is handled and
discarded once the retry delay has been computed.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .errors import ErrorKind


# Checked in order, first present wins. Keys are matched literally.
RETRY_HINT_HEADERS: tuple[str, ...] = ("retry-after", "x-ratelimit-reset", "ratelimit-reset")

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


@runtime_checkable
class HeaderLookup(Protocol):
    """Anything exposing mapping-style ``get`` (dict, httpx.Headers, ...)."""
    
    def get(self, key: str, default: object = None, /) -> object: ...


def parse_int_prefix(raw: object) -> int | None:
    """Parse a leading integer from a header value.
    
    Trailing text is ignored, so ``"2.5"`` parses as 2 and ``"30s"`` as 30.
    Returns None when the value does not start with an integer.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, bytes):
        raw = raw.decode("latin-1")
    m = _INT_PREFIX.match(str(raw))
    return int(m.group(1)) if m else None


@dataclass(frozen=True, slots=True)
class RetryHint:
    """Server instruction on when to retry.
    
    The raw value is either delta-seconds or an absolute Unix timestamp in
    seconds. Which one is only decided against the current time.
    
    Attributes:
        value: Parsed integer header value
        header: Header the value was read from
    """
    
    value: int
    header: str
    
    def is_absolute(self, now: float) -> bool:
        """Whether the value is a point in time strictly after ``now``."""
        return self.value > now
    
    def delay_ms(self, now: float) -> float:
        """Delay in milliseconds relative to ``now`` (epoch seconds).
        
        Not clamped: a timestamp that has just passed gives a non-positive
        delay which callers treat as "retry immediately".
        """
        if self.is_absolute(now):
            return self.value * 1000 - now * 1000
        return float(self.value * 1000)
    
    @classmethod
    def from_headers(cls, headers: Mapping[str, object] | HeaderLookup | None) -> RetryHint | None:
        """Extract the first usable hint from a header mapping.
        
        Empty values are treated as absent. A present value with no integer
        prefix yields None rather than falling through to the next header.
        """
        if headers is None:
            return None
        for name in RETRY_HINT_HEADERS:
            raw = headers.get(name)
            if raw is None or raw == "" or raw == b"":
                continue
            value = parse_int_prefix(raw)
            return cls(value, name) if value is not None else None
        return None


@dataclass(frozen=True, slots=True)
class ClassifiedError:
    """A failure tagged as rate-limited or other.
    
    Attributes:
        kind: RATE_LIMITED when the status is 429, OTHER otherwise
        status: Status read from the exception, if any
        hint: Retry hint read from the exception's headers, if any
    """
    
    kind: ErrorKind
    status: int | None = None
    hint: RetryHint | None = None
    
    @property
    def is_rate_limit(self) -> bool:
        from .errors import ErrorKind
        return self.kind is ErrorKind.RATE_LIMITED

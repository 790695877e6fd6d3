"""Error classification for retry decisions.

Classification is purely structural: an exception is rate-limited when it
carries a 429 status. Status and headers are looked up on the exception
itself first, then on an attached ``response`` object (the shape used by
httpx, requests and most SDK clients).
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Self

from .types import ClassifiedError, HeaderLookup, RetryHint

RATE_LIMIT_STATUS = 429

_STATUS_ATTRS = ("status_code", "status")


class ErrorKind(StrEnum):
    """How a failure is treated by the retry loop."""
    RATE_LIMITED = "RATE_LIMITED"
    OTHER = "OTHER"


class RateLimitError(Exception):
    """Exception for producers that have no HTTP client error of their own.
    
    Carries the same shape that classification reads from third-party
    client errors: a status and a header mapping.
    
    Example:
        >>> raise RateLimitError("slow down", headers={"retry-after": "2"})
    """
    
    __slots__ = ("status_code", "headers")
    
    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        headers: Mapping[str, str] | None = None,
        status_code: int = RATE_LIMIT_STATUS,
    ) -> None:
        self.status_code = status_code
        self.headers: dict[str, str] = dict(headers or {})
        super().__init__(message)
    
    @classmethod
    def retry_after(cls, seconds: int, message: str = "Rate limit exceeded") -> Self:
        """Create with a ``retry-after`` delta in seconds."""
        return cls(message, headers={"retry-after": str(seconds)})


def _coerce_status(raw: object) -> int | None:
    """Accept integer statuses and all-digit strings, nothing else."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, bytes):
        raw = raw.decode("latin-1")
    if isinstance(raw, str) and raw.strip().isdecimal():
        return int(raw.strip())
    return None


def _status_of(exc: BaseException) -> int | None:
    for source in (exc, getattr(exc, "response", None)):
        if source is None:
            continue
        for attr in _STATUS_ATTRS:
            raw = getattr(source, attr, None)
            if raw is None or callable(raw):
                continue
            status = _coerce_status(raw)
            if status is not None:
                return status
    return None


def _headers_of(exc: BaseException) -> Mapping[str, object] | HeaderLookup | None:
    for source in (exc, getattr(exc, "response", None)):
        headers = getattr(source, "headers", None) if source is not None else None
        if headers is not None and callable(getattr(headers, "get", None)):
            return headers
    return None


def extract_retry_hint(exc: BaseException) -> RetryHint | None:
    """Read a retry hint from the exception's headers, if it has any."""
    return RetryHint.from_headers(_headers_of(exc))


def is_rate_limit(exc: BaseException) -> bool:
    """True when the exception carries a 429 status."""
    return _status_of(exc) == RATE_LIMIT_STATUS


def classify_exception(exc: BaseException) -> ClassifiedError:
    """Tag an exception as rate-limited or other, with its retry hint."""
    status = _status_of(exc)
    kind = ErrorKind.RATE_LIMITED if status == RATE_LIMIT_STATUS else ErrorKind.OTHER
    return ClassifiedError(kind=kind, status=status, hint=extract_retry_hint(exc))

"""Shared fixtures: scripted producers and recording sleeps."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator, Sequence
from dataclasses import dataclass, field

import pytest

from streamretry import clear_settings_cache


class HttpError(Exception):
    """Client-style error exposing status and headers like httpx/SDK errors."""
    
    def __init__(self, status: int, headers: dict[str, str] | None = None) -> None:
        self.status = status
        self.headers = headers or {}
        super().__init__(f"HTTP {status}")


@dataclass
class ScriptedProducer:
    """Producer whose n-th call yields ``values[n]`` then raises ``errors[n]`` (if set)."""
    
    script: Sequence[tuple[Sequence[object], Exception | None]]
    calls: list[tuple[tuple[object, ...], dict[str, object]]] = field(default_factory=list)
    
    def _step(self, args: tuple[object, ...], kwargs: dict[str, object]) -> tuple[Sequence[object], Exception | None]:
        self.calls.append((args, kwargs))
        return self.script[min(len(self.calls), len(self.script)) - 1]
    
    async def stream(self, *args: object, **kwargs: object) -> AsyncIterator[object]:
        values, error = self._step(args, kwargs)
        for v in values:
            yield v
        if error is not None:
            raise error
    
    def stream_sync(self, *args: object, **kwargs: object) -> Iterator[object]:
        values, error = self._step(args, kwargs)
        yield from values
        if error is not None:
            raise error


@dataclass
class RecordingSleep:
    """Async + sync sleep replacement that records requested durations (seconds)."""
    
    waits: list[float] = field(default_factory=list)
    
    async def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)
    
    def sync(self, seconds: float) -> None:
        self.waits.append(seconds)


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for var in (
        "STREAMRETRY_RETRY_MAX_ATTEMPTS",
        "STREAMRETRY_RETRY_BASE_DELAY_MS",
        "STREAMRETRY_RETRY_MAX_DELAY_MS",
        "STREAMRETRY_RETRY_RETRY_ALL_ERRORS",
        "STREAMRETRY_LOG_LEVEL",
        "STREAMRETRY_LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()

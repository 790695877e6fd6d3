"""Retry-with-backoff for streaming producers.

A producer is a callable returning a lazy sequence (an async iterator, or a
plain iterator for the sync variant) that may raise at any point while it is
consumed. On failure the whole producer is re-invoked from scratch with the
original arguments. Values already forwarded from a failed attempt are not
retracted, so consumers see at-least-once delivery:

    attempt 0: a, b, <429>
    attempt 1: a, b, c
    consumer:  a, b, a, b, c

Example:
    >>> executor = RetryingStreamExecutor(RetryConfig(max_attempts=5))
    >>> async for token in executor.execute(client.stream, prompt):
    ...     print(token, end="")
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Iterable, Iterator
from typing import ParamSpec, TypeVar

from streamretry.foundation.errors import classify_exception

from .policy import RetryConfig, compute_delay, should_retry

P = ParamSpec("P")
T = TypeVar("T")

OnRetry = Callable[[int, Exception, float], None]

logger = logging.getLogger("streamretry.retry")


class RetryingStreamExecutor:
    """Drives a producer through the retry state machine.

    Attempting(i) -> Succeeded when the producer is exhausted normally,
    or Failed(i) -> Retrying(i) -> Attempting(i+1) while retries remain,
    or Exhausted, re-raising the original exception unchanged.

    Each ``execute`` call owns its own attempt counter, so one executor can
    serve any number of concurrent streams.

    Args:
        config: Retry configuration (default: environment settings)
        sleep: Async sleep taking seconds (default: asyncio.sleep)
        sleep_sync: Blocking sleep taking seconds (default: time.sleep)
        clock: Current Unix time in seconds (default: time.time)
        on_retry: Called as on_retry(attempt, exc, delay_ms) before each wait,
            with the computed delay before clamping
    """

    __slots__ = ("config", "_sleep", "_sleep_sync", "_clock", "on_retry")

    def __init__(
        self,
        config: RetryConfig | None = None,
        *,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        sleep_sync: Callable[[float], object] = time.sleep,
        clock: Callable[[], float] = time.time,
        on_retry: OnRetry | None = None,
    ) -> None:
        self.config = config or RetryConfig.from_settings()
        self._sleep = sleep
        self._sleep_sync = sleep_sync
        self._clock = clock
        self.on_retry = on_retry

    def _prepare_retry(self, exc: Exception, attempt: int, name: str) -> float | None:
        """Return seconds to wait before the next attempt, or None to give up."""
        cfg = self.config
        if not should_retry(exc, attempt, cfg):
            logger.debug(f"[{name}] Giving up after attempt {attempt + 1}/{cfg.max_attempts}: {exc!r}")
            return None

        delay = compute_delay(exc, attempt, cfg, now=self._clock())
        info = classify_exception(exc)
        logger.info(
            f"[{name}] Attempt {attempt + 1}/{cfg.max_attempts} failed "
            f"({info.kind}, status={info.status}). Retrying in {delay:.0f}ms"
        )
        if self.on_retry:
            self.on_retry(attempt, exc, delay)
        return max(0.0, delay) / 1000

    async def execute(
        self,
        producer: Callable[P, AsyncIterable[T]],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> AsyncIterator[T]:
        """Stream values from ``producer``, restarting it on retryable failures.
        
        Only failures while producing the next value are classified. Errors
        thrown in by the consumer (``athrow``) propagate without a retry, and
        closing the returned stream closes the current producer stream too.
        """
        name = _name_of(producer)
        for attempt in range(self.config.max_attempts):
            stream: AsyncIterator[T] | None = None
            try:
                while True:
                    try:
                        if stream is None:
                            stream = aiter(producer(*args, **kwargs))
                        item = await anext(stream)
                    except StopAsyncIteration:
                        return
                    except Exception as e:
                        if (wait := self._prepare_retry(e, attempt, name)) is None:
                            raise
                        break
                    yield item
            finally:
                if stream is not None:
                    await _aclose(stream)
            await self._sleep(wait)

    def execute_sync(
        self,
        producer: Callable[P, Iterable[T]],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Iterator[T]:
        """Synchronous version for plain generator producers."""
        name = _name_of(producer)
        for attempt in range(self.config.max_attempts):
            stream: Iterator[T] | None = None
            try:
                while True:
                    try:
                        if stream is None:
                            stream = iter(producer(*args, **kwargs))
                        item = next(stream)
                    except StopIteration:
                        return
                    except Exception as e:
                        if (wait := self._prepare_retry(e, attempt, name)) is None:
                            raise
                        break
                    yield item
            finally:
                if stream is not None:
                    _close(stream)
            self._sleep_sync(wait)

    def __repr__(self) -> str:
        return f"RetryingStreamExecutor({self.config!r})"


async def _aclose(stream: AsyncIterator[object]) -> None:
    if (aclose := getattr(stream, "aclose", None)) is not None:
        await aclose()


def _close(stream: Iterator[object]) -> None:
    if (close := getattr(stream, "close", None)) is not None:
        close()


def _name_of(producer: Callable[..., object]) -> str:
    return getattr(producer, "__qualname__", None) or getattr(producer, "__name__", None) or type(producer).__name__


def execute(
    producer: Callable[..., AsyncIterable[T]],
    args: Iterable[object] = (),
    config: RetryConfig | None = None,
    kwargs: dict[str, object] | None = None,
) -> AsyncIterator[T]:
    """Functional form: ``execute(producer, args, config)`` -> async iterator."""
    return RetryingStreamExecutor(config).execute(producer, *args, **(kwargs or {}))


def execute_sync(
    producer: Callable[..., Iterable[T]],
    args: Iterable[object] = (),
    config: RetryConfig | None = None,
    kwargs: dict[str, object] | None = None,
) -> Iterator[T]:
    """Functional form of RetryingStreamExecutor.execute_sync."""
    return RetryingStreamExecutor(config).execute_sync(producer, *args, **(kwargs or {}))

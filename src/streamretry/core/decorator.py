"""Decorator for attaching retry behavior to streaming producers.

Transforms an async generator function (or a plain generator function) into
one whose returned stream is driven by a RetryingStreamExecutor. Works for
free functions and methods alike, since the bound instance is simply
forwarded as the first argument on every attempt.

Example:
    >>> @with_retry(max_attempts=5, retry_all_errors=True)
    ... async def stream_tokens(prompt: str):
    ...     async for token in client.stream(prompt):
    ...         yield token
    
    >>> class ChatClient:
    ...     @with_retry()
    ...     async def create_message(self, messages):
    ...         async for chunk in self._api.stream(messages):
    ...             yield chunk
"""

from __future__ import annotations

import inspect
from collections.abc import AsyncIterator, Callable, Iterator
from functools import wraps
from typing import ParamSpec, TypeVar

from streamretry.runtime.retry import RetryConfig, RetryingStreamExecutor

P = ParamSpec("P")
T = TypeVar("T")


def _attach(fn: Callable[P, object], config: RetryConfig) -> Callable[P, object]:
    executor = RetryingStreamExecutor(config)
    
    if inspect.isasyncgenfunction(fn):
        @wraps(fn)
        def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> AsyncIterator[object]:
            return executor.execute(fn, *args, **kwargs)
        wrapper: Callable[P, object] = async_wrapper
    elif inspect.isgeneratorfunction(fn):
        @wraps(fn)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> Iterator[object]:
            return executor.execute_sync(fn, *args, **kwargs)
        wrapper = sync_wrapper
    else:
        raise TypeError(
            f"with_retry requires a generator or async generator function, "
            f"got {getattr(fn, '__qualname__', fn)!r}"
        )
    
    wrapper.retry_config = config  # type: ignore[attr-defined]
    wrapper.retry_executor = executor  # type: ignore[attr-defined]
    return wrapper


def with_retry(
    config: RetryConfig | None = None,
    **options: object,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator adding retry-with-backoff to a streaming producer.
    
    The configuration is resolved once, at decoration time: ``options``
    (max_attempts, base_delay_ms, max_delay_ms, retry_all_errors) are merged
    over ``config``, or over the environment defaults when no config is given.
    
    Args:
        config: Base RetryConfig
        **options: Per-field overrides
    
    Returns:
        Decorator for generator and async generator functions
    
    Raises:
        ValidationError: Unknown option name or invalid value
        TypeError: When applied to anything but a generator function
    """
    resolved = RetryConfig.resolve(config, **options)
    
    def decorator(fn: Callable[P, T]) -> Callable[P, T]:
        return _attach(fn, resolved)  # type: ignore[return-value]
    
    return decorator


def wrap(producer: Callable[P, T], config: RetryConfig | None = None, **options: object) -> Callable[P, T]:
    """Explicit form of with_retry: ``wrap(producer, config) -> producer'``."""
    return with_retry(config, **options)(producer)

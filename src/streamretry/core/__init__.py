"""Core - Attaching retry behavior to producers."""

from .decorator import with_retry, wrap

__all__ = ["with_retry", "wrap"]

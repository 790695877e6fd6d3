"""Observability for streamretry: stdlib logging setup."""

from .logging import JsonFormatter, configure_logging, get_logger

__all__ = ["JsonFormatter", "configure_logging", "get_logger"]

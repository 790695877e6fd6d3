"""Logging setup for streamretry.

Library modules log through stdlib loggers under the ``streamretry``
namespace and never configure handlers themselves. Applications that want
output call configure_logging() once at startup.

Example:
    >>> from streamretry.runtime.observability import configure_logging
    >>> configure_logging(level="DEBUG")          # human-readable
    >>> configure_logging(format="json")          # one JSON object per line
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TextIO

from streamretry.foundation.config import get_settings

ROOT_LOGGER = "streamretry"

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(
    level: str | None = None,
    format: str | None = None,  # noqa: A002 - matches LoggingSettings field
    *,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a single handler to the ``streamretry`` logger.
    
    Args:
        level: Minimum level (default: STREAMRETRY_LOG_LEVEL)
        format: "text" or "json" (default: STREAMRETRY_LOG_FORMAT)
        stream: Output stream (default: stderr)
    
    Returns:
        The configured package logger
    
    Calling again replaces the previously installed handler.
    """
    settings = get_settings().logging
    level = (level or settings.level).upper()
    format = format or settings.format
    
    if format == "json":
        formatter: logging.Formatter = JsonFormatter()
    elif format == "text":
        formatter = logging.Formatter(_TEXT_FORMAT)
    else:
        raise ValueError(f"Unknown format: {format}. Use 'text' or 'json'")
    
    root = logging.getLogger(ROOT_LOGGER)
    for h in [h for h in root.handlers if getattr(h, "_streamretry", False)]:
        root.removeHandler(h)
    
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)
    handler._streamretry = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))
    return root


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger in the ``streamretry`` namespace."""
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(name if name.startswith(f"{ROOT_LOGGER}.") else f"{ROOT_LOGGER}.{name}")

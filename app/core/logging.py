"""
Logging setup: JSON lines in production, plain text while debugging.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from app.config import get_settings

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def _extra_fields(record: logging.LogRecord) -> dict:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with `extra` fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extra_fields(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Single-line text for local development, `extra` fields appended."""

    def __init__(self) -> None:
        super().__init__(
            "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)

        extras = _extra_fields(record)
        if not extras:
            return line

        head, _, trace = line.partition("\n")
        head += " [" + ", ".join(f"{key}={value}" for key, value in extras.items()) + "]"
        return f"{head}\n{trace}" if trace else head


def setup_logging() -> None:
    """Route all logging to stdout at INFO, or DEBUG when DEBUG is set."""
    settings = get_settings()
    log_level = logging.DEBUG if settings.DEBUG else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(ConsoleFormatter() if settings.DEBUG else JSONFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # Access logs duplicate the timing header
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Configured logger instance.
    """
    return logging.getLogger(name)

"""Core modules for the Health Log Question Engine."""

from app.core.logging import get_logger, setup_logging
from app.core.rate_limit import get_rate_limit_string, limiter

__all__ = [
    "get_logger",
    "setup_logging",
    "limiter",
    "get_rate_limit_string",
]

"""
Rate limiting configuration using SlowAPI.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import get_settings


def get_rate_limit_string() -> str:
    """Get the rate limit string from settings."""
    return get_settings().RATE_LIMIT


# Keyed on the peer address only. Behind a proxy, uvicorn's proxy headers
# support (FORWARDED_ALLOW_IPS) rewrites the peer to the real client.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[get_rate_limit_string()]
)

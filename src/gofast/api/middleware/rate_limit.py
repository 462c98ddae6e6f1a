"""Rate limiting for FastAPI.

Uses slowapi to implement rate limiting with support for
authenticated users (by uid) and anonymous users (by IP).
"""

from typing import Optional

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ...config import get_settings


def get_rate_limit_key(request: Request) -> str:
    """Get the rate limit key for a request.

    Uses the uid if authenticated (from request state), otherwise falls back
    to the client's IP address.
    """
    user: Optional[object] = getattr(request.state, "user", None)
    if user is not None:
        user_id = getattr(user, "user_id", None)
        if user_id:
            return f"user:{user_id}"

    return f"ip:{get_remote_address(request)}"


def ai_generate_rate_limit() -> str:
    """Configured limit for run draft generation, e.g. ``30/minute``."""
    return get_settings().ai_generate_rate_limit


limiter = Limiter(key_func=get_rate_limit_key)

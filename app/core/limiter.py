"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Limit strings and decorators live here.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def context_limit() -> str:
    """Per-client limit for the context endpoint (CONTEXT_RATE_LIMIT, default 30/minute)."""
    return get_settings().context_rate_limit


limit_context = limiter.limit(context_limit)

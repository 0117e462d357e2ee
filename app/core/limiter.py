"""Rate limiter construction.

One slowapi Limiter per application, created in create_app() and stored on
app.state.limiter. Its limits storage and fixed-window strategy back
RateLimitMiddleware, which counts every request under /api.
"""

from limits import RateLimitItem, parse
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import Settings


def build_limiter(settings: Settings) -> Limiter:
    """Fixed-window limiter with in-memory counters keyed by client address."""
    return Limiter(
        key_func=get_remote_address,
        strategy="fixed-window",
        storage_uri="memory://",
        enabled=settings.RATE_LIMIT_ENABLED,
    )


def api_rate_limit(settings: Settings) -> RateLimitItem:
    """The single window shared by the whole API surface (e.g. 100/hour)."""
    return parse(settings.RATE_LIMIT)

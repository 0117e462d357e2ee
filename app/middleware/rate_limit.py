"""Application-wide rate limit for the API surface.

Every request whose path starts with the prefix counts against one fixed
window per client address, including requests that end in 404. Counting
happens before routing, so it does not depend on route lookup. Raw ASGI.
"""

import logging
from typing import Callable

from limits import RateLimitItem
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from app.core.errors import RATE_LIMIT_MESSAGE, error_response

logger = logging.getLogger(__name__)


def RateLimitMiddleware(
    app: Callable, limiter: Limiter, limit: RateLimitItem, prefix: str = "/api"
) -> Callable:
    """Reject requests over limit with the 429 envelope. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or not limiter.enabled or not scope["path"].startswith(prefix):
            await app(scope, receive, send)
            return

        key = get_remote_address(Request(scope))
        if not limiter.limiter.hit(limit, key):
            logger.info("Rate limit exceeded for %s on %s", key, scope["path"])
            response = error_response(429, RATE_LIMIT_MESSAGE)
            await response(scope, receive, send)
            return
        await app(scope, receive, send)

    return asgi_app

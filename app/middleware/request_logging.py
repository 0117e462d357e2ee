"""Request logging middleware (development only).

Logs method, path, status code and duration for each request, and tags the
response with an x-request-id header for correlation.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("app.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = str(uuid.uuid4())
        start = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception:
            dur_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.exception(
                "%s %s failed after %sms request_id=%s",
                request.method, request.url.path, dur_ms, rid,
            )
            raise
        dur_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            "%s %s %s %sms request_id=%s",
            request.method, request.url.path, response.status_code, dur_ms, rid,
        )
        response.headers["x-request-id"] = rid
        return response

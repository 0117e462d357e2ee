"""JSON body sanitization middleware.

Rewrites application/json request bodies through app.shared.sanitization
before routing. Bodies that are not valid JSON pass through untouched so
request validation reports them. Raw ASGI; sits inside the size limit, so
the body is already bounded.
"""

import json
import logging
from typing import Callable

from app.middleware.request_size_limit import get_header, read_body, replay_receive
from app.shared.sanitization import sanitize_value

logger = logging.getLogger(__name__)


def SanitizeBodyMiddleware(app: Callable) -> Callable:
    """Sanitize JSON request bodies. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        content_type = (get_header(scope, "content-type") or "").split(";")[0].strip().lower()
        if content_type != "application/json":
            await app(scope, receive, send)
            return

        body, disconnect = await read_body(receive)
        if disconnect is not None:
            return
        try:
            data = json.loads(body) if body else None
        except (json.JSONDecodeError, UnicodeDecodeError):
            await app(scope, replay_receive(body, receive), send)
            return
        try:
            cleaned = sanitize_value(data)
        except ValueError:
            logger.info("Rejected over-nested JSON body on %s", scope.get("path"))
            cleaned = None
        new_body = json.dumps(cleaned).encode("utf-8") if data is not None else body

        headers = [
            (k, v) for k, v in scope.get("headers", [])
            if k.lower() not in (b"content-length", b"transfer-encoding")
        ]
        headers.append((b"content-length", str(len(new_body)).encode()))
        new_scope = dict(scope)
        new_scope["headers"] = headers
        await app(new_scope, replay_receive(new_body, receive), send)

    return asgi_app

"""Turn unexpected exceptions into the 500 envelope inside the middleware stack.

Starlette runs the catch-all exception handler in its outermost layer, so a
500 built there skips CORS and the security headers. Wrapping the inner app
here gives the error response the same headers as every other response.
Raw ASGI.
"""

from typing import Callable

from starlette.requests import Request

from app.core.errors import internal_error_response


def UnhandledErrorMiddleware(app: Callable) -> Callable:
    """Answer unexpected exceptions with the 500 envelope unless a response already started."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        started = False

        async def send_wrapper(message: dict) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await app(scope, receive, send_wrapper)
        except Exception as exc:
            if started:
                raise
            response = internal_error_response(Request(scope), exc)
            await response(scope, receive, send)

    return asgi_app

"""HTTP parameter pollution prevention.

Repeated query parameters collapse to their last value, so handlers never
receive a list where they expect a scalar. Names in the whitelist keep all
their values. Raw ASGI.
"""

from typing import Callable, Iterable
from urllib.parse import parse_qsl, urlencode


def collapse_query_string(query_string: bytes, whitelist: frozenset[str]) -> bytes:
    """Return query_string with non-whitelisted duplicates reduced to the last occurrence."""
    if not query_string:
        return query_string
    pairs = parse_qsl(query_string.decode("latin-1"), keep_blank_values=True)
    last_index = {name: i for i, (name, _) in enumerate(pairs)}
    kept = [
        (name, value)
        for i, (name, value) in enumerate(pairs)
        if name in whitelist or last_index[name] == i
    ]
    if len(kept) == len(pairs):
        return query_string
    return urlencode(kept).encode("latin-1")


def ParameterPollutionMiddleware(app: Callable, whitelist: Iterable[str] = ()) -> Callable:
    """Collapse duplicate query parameters before routing. Raw ASGI."""
    allowed = frozenset(whitelist)

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] == "http" and scope.get("query_string"):
            new_qs = collapse_query_string(scope["query_string"], allowed)
            if new_qs is not scope["query_string"]:
                scope = dict(scope)
                scope["query_string"] = new_qs
        await app(scope, receive, send)

    return asgi_app

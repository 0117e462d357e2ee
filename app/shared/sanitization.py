"""Input sanitization for XSS and operator-injection prevention."""

from typing import Any

import nh3

MAX_DEPTH = 32

# Secrets are hashed, never rendered; cleaning them would change the password the user typed.
VERBATIM_KEYS = frozenset({"password", "passwordConfirm", "password_confirm", "currentPassword"})


def is_unsafe_key(key: str) -> bool:
    """Keys that look like query operators ($gt) or path traversal (a.b) are not accepted."""
    return key.startswith("$") or "." in key


def sanitize_string(value: str) -> str:
    """Strip all HTML tags; keep text content."""
    if not value:
        return value
    return nh3.clean(value, tags=set(), attributes={})


def sanitize_value(value: Any, max_depth: int = MAX_DEPTH) -> Any:
    """Recursively sanitize JSON-like data.

    Drops unsafe keys from objects and strips HTML from every string.
    Raises ValueError when nesting exceeds max_depth.
    """
    if max_depth <= 0:
        raise ValueError("Maximum nesting depth exceeded")
    if isinstance(value, str):
        return sanitize_string(value)
    if isinstance(value, dict):
        return {
            key: item if key in VERBATIM_KEYS and isinstance(item, str) else sanitize_value(item, max_depth - 1)
            for key, item in value.items()
            if not is_unsafe_key(str(key))
        }
    if isinstance(value, list):
        return [sanitize_value(item, max_depth - 1) for item in value]
    return value

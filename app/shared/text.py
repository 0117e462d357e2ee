"""Text helpers."""

import re
import unicodedata

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lowercase, ASCII-folded, hyphen-separated slug (e.g. 'Conference Room Alpha' -> 'conference-room-alpha')."""
    folded = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    return _NON_SLUG_CHARS.sub("-", folded.lower()).strip("-")


def camel_to_snake(name: str) -> str:
    """'startDate' -> 'start_date'; snake_case input is returned unchanged."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()

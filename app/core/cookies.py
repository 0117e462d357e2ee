"""Session cookie policy shared by login and logout.

Browsers only overwrite a cookie when name, path and attributes line up, so
both the issuing and the clearing path go through the same policy object.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Literal

from fastapi import Request, Response

from app.core.config import Settings

SESSION_COOKIE_NAME = "jwt"
LOGGED_OUT_VALUE = "loggedOut"
LOGOUT_EXPIRES_SECONDS = 10


@dataclass(frozen=True)
class SessionCookiePolicy:
    """Attributes for the session cookie, fixed at application startup."""

    expires_hours: int
    trusted_proxies: frozenset[str] = field(default_factory=frozenset)
    name: str = SESSION_COOKIE_NAME
    path: str = "/"
    httponly: bool = True
    samesite: Literal["lax", "strict", "none"] = "none"

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionCookiePolicy":
        return cls(
            expires_hours=settings.JWT_COOKIE_EXPIRES_HOURS,
            trusted_proxies=frozenset(settings.TRUSTED_PROXIES),
        )

    def is_secure(self, request: Request) -> bool:
        """True when the request came over TLS, directly or via a trusted proxy."""
        if request.url.scheme == "https":
            return True
        peer = request.client.host if request.client else None
        if peer is None or peer not in self.trusted_proxies:
            return False
        forwarded = request.headers.get("x-forwarded-proto", "")
        # A proxy chain may append; the first entry is the client-facing scheme.
        return forwarded.split(",")[0].strip().lower() == "https"

    def issue(self, response: Response, token: str, request: Request) -> datetime:
        """Set the session cookie carrying token; returns its expiry."""
        expires = datetime.now(UTC) + timedelta(hours=self.expires_hours)
        self._write(response, token, expires, request)
        return expires

    def clear(self, response: Response, request: Request) -> datetime:
        """Overwrite the session cookie with a short-lived placeholder."""
        expires = datetime.now(UTC) + timedelta(seconds=LOGOUT_EXPIRES_SECONDS)
        self._write(response, LOGGED_OUT_VALUE, expires, request)
        return expires

    def _write(self, response: Response, value: str, expires: datetime, request: Request) -> None:
        response.set_cookie(
            key=self.name,
            value=value,
            expires=expires,
            path=self.path,
            secure=self.is_secure(request),
            httponly=self.httponly,
            samesite=self.samesite,
        )


def get_cookie_policy(request: Request) -> SessionCookiePolicy:
    """Dependency returning the application's cookie policy."""
    return request.app.state.cookie_policy

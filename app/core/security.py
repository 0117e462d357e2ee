"""Credential hashing and session token signing."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import Settings

BCRYPT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72

USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


# Checked instead of a real hash for unknown usernames so both login failures cost one bcrypt round.
_DUMMY_HASH = bcrypt.hashpw(_password_bytes("no-such-user"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))


def hash_password(plain_password: str) -> str:
    """Return the bcrypt hash stored in users.password_hash."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("ascii")


def verify_password(plain_password: str, hashed: str | None) -> bool:
    """True when plain_password matches hashed. hashed=None (unknown user) never matches."""
    candidate = _password_bytes(plain_password)
    if hashed is None:
        bcrypt.checkpw(candidate, _DUMMY_HASH)
        return False
    try:
        return bcrypt.checkpw(candidate, hashed.encode("ascii"))
    except (ValueError, TypeError, UnicodeEncodeError):
        # Corrupt or non-bcrypt value in the column.
        return False


def create_access_token(sub: str | int, settings: Settings) -> str:
    """Sign a session token for user id sub, valid for JWT_EXPIRE_MINUTES."""
    issued_at = datetime.now(UTC)
    claims: dict[str, Any] = {
        "sub": str(sub),
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    }
    return jwt.encode(claims, settings.JWT_SECRET.get_secret_value(), algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises jwt.ExpiredSignatureError for stale tokens and jwt.PyJWTError for
    anything else that does not verify.
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp", "iat"]},
    )

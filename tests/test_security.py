"""Unit tests for app.core.security and settings validation: hashing, tokens, fatal missing secret."""

import os
import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import jwt
from pydantic import ValidationError

from app.core.config import Settings
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from support import make_settings


class TestPasswordHashing(unittest.TestCase):
    """Passwords are stored one-way hashed."""

    def test_hash_differs_from_plaintext(self) -> None:
        hashed = hash_password("Password123")
        self.assertNotEqual(hashed, "Password123")
        self.assertNotIn("Password123", hashed)

    def test_same_password_hashes_differently(self) -> None:
        self.assertNotEqual(hash_password("Password123"), hash_password("Password123"))

    def test_verify_accepts_correct_password(self) -> None:
        self.assertTrue(verify_password("Password123", hash_password("Password123")))

    def test_verify_rejects_wrong_password(self) -> None:
        self.assertFalse(verify_password("wrong", hash_password("Password123")))

    def test_verify_without_hash_is_false(self) -> None:
        self.assertFalse(verify_password("Password123", None))

    def test_verify_malformed_hash_is_false(self) -> None:
        self.assertFalse(verify_password("Password123", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    """Tokens carry the user id and expire after JWT_EXPIRE_MINUTES."""

    def setUp(self) -> None:
        self.settings = make_settings(JWT_EXPIRE_MINUTES=30)

    def test_round_trip_subject(self) -> None:
        token = create_access_token(sub=42, settings=self.settings)
        payload = decode_access_token(token, self.settings)
        self.assertEqual(payload["sub"], "42")

    def test_expiry_matches_ttl(self) -> None:
        before = datetime.now(UTC)
        payload = decode_access_token(create_access_token(sub=1, settings=self.settings), self.settings)
        exp = datetime.fromtimestamp(payload["exp"], UTC)
        self.assertLessEqual(exp, before + timedelta(minutes=30, seconds=5))
        self.assertGreaterEqual(exp, before + timedelta(minutes=30, seconds=-5))

    def test_wrong_secret_rejected(self) -> None:
        token = create_access_token(sub=1, settings=self.settings)
        other = make_settings(JWT_SECRET="another-secret")
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(token, other)

    def test_expired_token_rejected(self) -> None:
        token = jwt.encode(
            {
                "sub": "1",
                "iat": datetime.now(UTC) - timedelta(minutes=31),
                "exp": datetime.now(UTC) - timedelta(minutes=1),
            },
            "test-secret-not-for-production",
            algorithm="HS256",
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token, self.settings)

    def test_token_without_expiry_rejected(self) -> None:
        token = jwt.encode({"sub": "1"}, "test-secret-not-for-production", algorithm="HS256")
        with self.assertRaises(jwt.MissingRequiredClaimError):
            decode_access_token(token, self.settings)


class TestSettings(unittest.TestCase):
    """A missing or blank signing secret is a configuration error."""

    def test_blank_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(JWT_SECRET="   ")

    def test_missing_secret_rejected(self) -> None:
        with patch.dict(os.environ):
            os.environ.pop("JWT_SECRET", None)
            with self.assertRaises(ValidationError):
                Settings(_env_file=None, DATABASE_URL="sqlite://")

    def test_unsupported_database_url_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(DATABASE_URL="mongodb://localhost/workspace")

    def test_client_side_url_trailing_slash_stripped(self) -> None:
        settings = make_settings(CLIENT_SIDE_URL="https://app.example.com/")
        self.assertEqual(settings.CLIENT_SIDE_URL, "https://app.example.com")

    def test_malformed_rate_limit_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(RATE_LIMIT="lots")
        self.assertEqual(make_settings(RATE_LIMIT="5/minute").RATE_LIMIT, "5/minute")


if __name__ == "__main__":
    unittest.main()

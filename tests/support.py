"""Shared helpers for API tests: isolated app per test with an in-memory SQLite database."""

import re
import unittest
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any

from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.schemas.auth import SignupRequest
from app.services.users import create_user

PASSWORD = "Password123"


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "JWT_SECRET": "test-secret-not-for-production",
        "DATABASE_URL": "sqlite://",
        "APP_ENV": "prod",
        "LOG_LEVEL": "WARNING",
        "CLIENT_SIDE_URL": "http://frontend.test",
        "JWT_COOKIE_EXPIRES_HOURS": 24,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def signup_payload(username: str = "bob", **overrides: Any) -> dict[str, Any]:
    payload = {
        "firstName": "Bob",
        "lastName": "Builder",
        "address": "Kolkata, India",
        "birthdate": "1990-01-01",
        "email": f"{username}@example.com",
        "username": username,
        "password": PASSWORD,
        "passwordConfirm": PASSWORD,
    }
    payload.update(overrides)
    return payload


def cookie_attributes(set_cookie: str) -> dict[str, str]:
    """Parse a Set-Cookie header into lower-cased attribute names -> values ('' for flags)."""
    parts = [p.strip() for p in set_cookie.split(";") if p.strip()]
    name, _, value = parts[0].partition("=")
    attrs = {"name": name, "value": value.strip('"')}
    for part in parts[1:]:
        key, _, val = part.partition("=")
        attrs[key.strip().lower()] = val.strip()
    return attrs


def cookie_expiry(set_cookie: str) -> datetime:
    match = re.search(r"expires=([^;]+)", set_cookie, re.IGNORECASE)
    assert match is not None, f"no expires in {set_cookie!r}"
    return parsedate_to_datetime(match.group(1))


class ApiTestCase(unittest.TestCase):
    """Fresh app, database and rate limiter per test."""

    settings_overrides: dict[str, Any] = {}
    base_url = "http://testserver"

    def setUp(self) -> None:
        self.settings = make_settings(**self.settings_overrides)
        self.app = create_app(self.settings)
        self.app.state.db.create_all()
        self.client = TestClient(self.app, base_url=self.base_url)

    def tearDown(self) -> None:
        self.client.close()
        self.app.state.db.dispose()

    def create_user(
        self,
        username: str,
        role: str = "user",
        is_active: bool = True,
        password: str = PASSWORD,
    ) -> int:
        """Insert a user directly through the service layer; returns its id."""
        body = SignupRequest.model_validate(
            signup_payload(username, password=password, passwordConfirm=password)
        )
        db = self.app.state.db.session()
        try:
            return create_user(db, body, role=role, is_active=is_active).id
        finally:
            db.close()

    def login(self, username: str, password: str = PASSWORD) -> str:
        response = self.client.post(
            "/api/v1/users/login", json={"username": username, "password": password}
        )
        self.assertEqual(response.status_code, 200, response.text)
        # Callers authenticate explicitly; keep the jar empty.
        self.client.cookies.clear()
        return response.json()["token"]

    def auth_headers(self, username: str, role: str = "user") -> dict[str, str]:
        """Create an active user with role and return Bearer headers for it."""
        self.create_user(username, role=role)
        return {"Authorization": f"Bearer {self.login(username)}"}

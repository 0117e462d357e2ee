"""Test environment: settings must resolve before app.main is imported."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "prod")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.core import security  # noqa: E402

# Cheap hashes keep the suite fast; production cost stays 12.
security.BCRYPT_ROUNDS = 4

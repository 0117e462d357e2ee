"""Request/response schemas for auth and user endpoints.

UserOut is the only shape a user leaves the API in; it has no password
field, so hashes cannot be serialized by accident.
"""

import re
from datetime import date, datetime
from typing import Literal

from pydantic import Field, field_validator, model_validator

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from app.schemas.common import ApiModel

Role = Literal["admin", "owner", "user"]

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    email = value.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Please provide a valid email")
    return email


class SignupRequest(ApiModel):
    """Profile fields and credentials for self-service signup."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(default="", max_length=255)
    birthdate: date | None = None
    email: str = Field(..., max_length=255)
    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    password_confirm: str = Field(..., max_length=PASSWORD_MAX_LEN)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("username", "first_name", "last_name")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @model_validator(mode="after")
    def passwords_match(self) -> "SignupRequest":
        if self.password != self.password_confirm:
            raise ValueError("Passwords are not the same!")
        return self


class LoginRequest(ApiModel):
    """Credentials for login. Presence is checked by the endpoint so the error is uniform."""

    username: str | None = Field(default=None, max_length=USERNAME_MAX_LEN)
    password: str | None = Field(default=None, max_length=PASSWORD_MAX_LEN)


class UserOut(ApiModel):
    """Public representation of a user (no password)."""

    id: int
    first_name: str
    last_name: str
    address: str
    birthdate: date | None = None
    email: str
    username: str
    role: str
    is_active: bool
    created_at: datetime | None = None


class UserResponse(ApiModel):
    status: Literal["success"] = "success"
    data: UserOut


class LoginResponse(ApiModel):
    """Token plus user; the same token is also set as the jwt cookie."""

    status: Literal["success"] = "success"
    token: str = Field(..., description="JWT access token")
    data: UserOut


class UserUpdate(ApiModel):
    """Admin-editable user fields. Activation happens here."""

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    address: str | None = Field(default=None, max_length=255)
    birthdate: date | None = None
    email: str | None = Field(default=None, max_length=255)
    role: Role | None = None
    is_active: bool | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return normalize_email(v) if v is not None else None


class CurrentUser(ApiModel):
    """Authenticated user (id, username, role) for dependency injection."""

    id: int
    username: str
    role: str

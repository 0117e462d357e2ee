"""Schemas for visitor log entries."""

from datetime import datetime

from pydantic import Field, field_validator

from app.schemas.auth import normalize_email
from app.schemas.common import ApiModel


class VisitorCreate(ApiModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(default="", max_length=255)
    email: str = Field(..., max_length=255)
    purpose: str = Field(default="Visit", min_length=1, max_length=255)
    room_id: int | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class VisitorUpdate(ApiModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    address: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    purpose: str | None = Field(default=None, min_length=1, max_length=255)
    room_id: int | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return normalize_email(v) if v is not None else None


class VisitorOut(ApiModel):
    id: int
    first_name: str
    last_name: str
    address: str
    email: str
    purpose: str
    room_id: int | None = None
    created_at: datetime | None = None

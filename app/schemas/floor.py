"""Schemas for floors."""

from pydantic import Field

from app.schemas.common import ApiModel


class FloorCreate(ApiModel):
    number: int = Field(..., ge=0, description="Floor number; unique per building")
    name: str = Field(..., min_length=1, max_length=255)


class FloorUpdate(ApiModel):
    number: int | None = Field(default=None, ge=0)
    name: str | None = Field(default=None, min_length=1, max_length=255)


class FloorOut(ApiModel):
    id: int
    number: int
    name: str

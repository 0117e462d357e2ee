"""Schemas for rooms. slug is server-generated and never accepted from clients."""

from typing import Literal

from pydantic import Field

from app.schemas.common import ApiModel

RoomType = Literal["office", "coworking-space"]


class RoomCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=5000)
    room_features: list[str] = Field(default_factory=list, max_length=50)
    thumbnail: str | None = Field(default=None, max_length=255)
    photos: list[str] = Field(default_factory=list, max_length=20)
    price: float = Field(..., gt=0, description="Price per day")
    type: RoomType = "office"
    floor_id: int | None = None


class RoomUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    room_features: list[str] | None = Field(default=None, max_length=50)
    thumbnail: str | None = Field(default=None, max_length=255)
    photos: list[str] | None = Field(default=None, max_length=20)
    price: float | None = Field(default=None, gt=0)
    type: RoomType | None = None
    floor_id: int | None = None


class RoomOut(ApiModel):
    id: int
    name: str
    slug: str
    description: str
    room_features: list[str]
    thumbnail: str | None = None
    photos: list[str]
    price: float
    type: str
    floor_id: int | None = None

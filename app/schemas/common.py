"""Shared schema base and response envelopes."""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for request/response bodies: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ItemResponse(ApiModel, Generic[T]):
    """Envelope for a single resource."""

    status: Literal["success"] = "success"
    data: T


class ListResponse(ApiModel, Generic[T]):
    """Envelope for a page of resources."""

    status: Literal["success"] = "success"
    results: int = Field(..., description="Number of items in this page")
    data: list[T]


class StatusResponse(ApiModel):
    """Envelope with no payload (logout, liveness)."""

    status: Literal["success"] = "success"
    message: str | None = None


class PageParams(ApiModel):
    """Pagination and sort options for list endpoints."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=100, ge=1, le=100)
    sort: str | None = Field(
        default=None,
        description="Comma-separated field names; prefix with '-' for descending",
    )

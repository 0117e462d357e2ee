"""Schemas for discount vouchers."""

from pydantic import Field, field_validator

from app.schemas.common import ApiModel


def _normalize_code(value: str) -> str:
    code = value.strip().upper()
    if not code:
        raise ValueError("code must be non-empty")
    return code


class VoucherCreate(ApiModel):
    code: str = Field(..., min_length=1, max_length=64)
    discount: int = Field(..., ge=1, le=100, description="Percentage off the order total")

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        return _normalize_code(v)


class VoucherUpdate(ApiModel):
    code: str | None = Field(default=None, min_length=1, max_length=64)
    discount: int | None = Field(default=None, ge=1, le=100)

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str | None) -> str | None:
        return _normalize_code(v) if v is not None else None


class VoucherOut(ApiModel):
    id: int
    code: str
    discount: int

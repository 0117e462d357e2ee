"""Schemas for orders (room bookings)."""

from datetime import UTC, datetime

from pydantic import Field, field_validator, model_validator

from app.schemas.common import ApiModel


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


class OrderCreate(ApiModel):
    """Booking request. The booking user is always the caller."""

    room_id: int
    employee_id: int | None = None
    start_date: datetime
    end_date: datetime
    voucher_code: str | None = Field(default=None, max_length=64)
    total_price: float | None = Field(default=None, ge=0)

    @field_validator("start_date", "end_date")
    @classmethod
    def to_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @model_validator(mode="after")
    def check_dates(self) -> "OrderCreate":
        if self.start_date <= datetime.now(UTC):
            raise ValueError("Start date must be in the future")
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self


class OrderUpdate(ApiModel):
    employee_id: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    total_price: float | None = Field(default=None, ge=0)

    @field_validator("start_date", "end_date")
    @classmethod
    def to_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v) if v is not None else None

    @model_validator(mode="after")
    def check_dates(self) -> "OrderUpdate":
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self


class OrderOut(ApiModel):
    id: int
    user_id: int
    room_id: int
    employee_id: int | None = None
    voucher_id: int | None = None
    start_date: datetime
    end_date: datetime
    total_price: float
    created_at: datetime | None = None

"""Schemas for employees."""

from typing import Literal

from pydantic import Field

from app.schemas.common import ApiModel

JobDescription = Literal["receptionist", "office-boy", "security", "customer-service", "owner"]


class EmployeeCreate(ApiModel):
    salary: float = Field(..., ge=0)
    jobdesc: JobDescription
    user_id: int


class EmployeeUpdate(ApiModel):
    salary: float | None = Field(default=None, ge=0)
    jobdesc: JobDescription | None = None
    user_id: int | None = None


class EmployeeOut(ApiModel):
    id: int
    salary: float
    jobdesc: str
    user_id: int

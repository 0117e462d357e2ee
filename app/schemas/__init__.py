"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    UserOut,
    UserResponse,
    UserUpdate,
)
from app.schemas.common import ApiModel, ItemResponse, ListResponse, PageParams, StatusResponse
from app.schemas.employee import EmployeeCreate, EmployeeOut, EmployeeUpdate
from app.schemas.floor import FloorCreate, FloorOut, FloorUpdate
from app.schemas.health import HealthResponse
from app.schemas.order import OrderCreate, OrderOut, OrderUpdate
from app.schemas.room import RoomCreate, RoomOut, RoomUpdate
from app.schemas.visitor import VisitorCreate, VisitorOut, VisitorUpdate
from app.schemas.voucher import VoucherCreate, VoucherOut, VoucherUpdate

__all__ = [
    "ApiModel",
    "CurrentUser",
    "EmployeeCreate",
    "EmployeeOut",
    "EmployeeUpdate",
    "FloorCreate",
    "FloorOut",
    "FloorUpdate",
    "HealthResponse",
    "ItemResponse",
    "ListResponse",
    "LoginRequest",
    "LoginResponse",
    "OrderCreate",
    "OrderOut",
    "OrderUpdate",
    "PageParams",
    "RoomCreate",
    "RoomOut",
    "RoomUpdate",
    "SignupRequest",
    "StatusResponse",
    "UserOut",
    "UserResponse",
    "UserUpdate",
    "VisitorCreate",
    "VisitorOut",
    "VisitorUpdate",
    "VoucherCreate",
    "VoucherOut",
    "VoucherUpdate",
]

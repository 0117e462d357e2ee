"""Order (booking) pricing and persistence."""

import logging
import math
from datetime import datetime

from fastapi import status
from sqlalchemy.orm import Session

from app.core.errors import AppError
from app.models import Employee, Order, Room, Voucher
from app.schemas.order import OrderCreate, OrderUpdate, as_utc
from app.services import crud

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def booked_days(start: datetime, end: datetime) -> int:
    """Number of started days between start and end; at least one."""
    seconds = (end - start).total_seconds()
    return max(1, math.ceil(seconds / SECONDS_PER_DAY))


def quote_total(price_per_day: float, start: datetime, end: datetime, discount: int = 0) -> float:
    """Room price times started days, reduced by a whole-percent discount."""
    gross = price_per_day * booked_days(start, end)
    return round(gross * (100 - discount) / 100, 2)


def find_voucher(db: Session, code: str) -> Voucher:
    voucher = db.query(Voucher).filter(Voucher.code == code.strip().upper()).first()
    if voucher is None:
        raise crud.not_found_error("voucher")
    return voucher


def create_order(db: Session, user_id: int, body: OrderCreate) -> Order:
    """Create a booking for user_id; prices it from the room unless a total is given."""
    room = crud.get_item(db, Room, body.room_id, "room")
    crud.ensure_exists(db, Employee, body.employee_id, "employee")
    voucher = find_voucher(db, body.voucher_code) if body.voucher_code else None

    total = body.total_price
    if total is None:
        total = quote_total(
            room.price,
            body.start_date,
            body.end_date,
            voucher.discount if voucher else 0,
        )
    order = crud.create_item(
        db,
        Order,
        {
            "user_id": user_id,
            "room_id": room.id,
            "employee_id": body.employee_id,
            "voucher_id": voucher.id if voucher else None,
            "start_date": body.start_date,
            "end_date": body.end_date,
            "total_price": total,
        },
    )
    logger.info(
        "Order created: id=%s user_id=%s room_id=%s total=%s voucher=%s",
        order.id, user_id, room.id, total, voucher.code if voucher else None,
    )
    return order


def update_order(db: Session, order: Order, body: OrderUpdate) -> Order:
    values = crud.drop_required_nulls(Order, body.model_dump(exclude_unset=True))
    start = values.get("start_date", order.start_date)
    end = values.get("end_date", order.end_date)
    if as_utc(end) <= as_utc(start):
        raise AppError("End date must be after start date", status.HTTP_400_BAD_REQUEST)
    if "employee_id" in values:
        crud.ensure_exists(db, Employee, values["employee_id"], "employee")
    return crud.update_item(db, order, values)

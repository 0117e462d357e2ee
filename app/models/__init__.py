"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.employee import Employee
from app.models.floor import Floor
from app.models.order import Order
from app.models.room import Room
from app.models.user import USER_ROLES, User
from app.models.visitor import Visitor
from app.models.voucher import Voucher

__all__ = ["Base", "Employee", "Floor", "Order", "Room", "USER_ROLES", "User", "Visitor", "Voucher"]

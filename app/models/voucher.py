"""ORM model for percentage discount vouchers."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base


class Voucher(Base):
    """Discount code; discount is a whole percentage (1-100). code is stored upper-case."""

    __tablename__ = "vouchers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(64), nullable=False, unique=True, index=True)
    discount = Column(Integer, nullable=False)

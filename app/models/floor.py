"""ORM model for building floors."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base


class Floor(Base):
    __tablename__ = "floors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    number = Column(Integer, nullable=False, unique=True)
    name = Column(String(255), nullable=False)

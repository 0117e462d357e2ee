"""ORM model for bookable rooms (offices and coworking spaces)."""

from sqlalchemy import JSON, Column, Float, ForeignKey, Integer, String, Text

from app.models.base import Base

ROOM_TYPES = ("office", "coworking-space")


class Room(Base):
    """
    Bookable space. slug is derived from name on create and rename.

    room_features and photos are JSON lists of strings; photos and thumbnail
    hold file names under the public images directory.
    """

    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=False, default="")
    room_features = Column(JSON, nullable=False, default=list)
    thumbnail = Column(String(255), nullable=True)
    photos = Column(JSON, nullable=False, default=list)
    price = Column(Float, nullable=False)
    type = Column(String(32), nullable=False, default="office")
    floor_id = Column(Integer, ForeignKey("floors.id", ondelete="SET NULL"), nullable=True, index=True)

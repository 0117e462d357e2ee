"""Room creation and updates; keeps slug in step with name."""

from fastapi import status
from sqlalchemy.orm import Session

from app.core.errors import AppError
from app.models import Floor, Room
from app.schemas.room import RoomCreate, RoomUpdate
from app.services import crud
from app.shared.text import slugify

ROOM_UNIQUE_FIELDS = ("name", "slug")


def _slug_for(name: str) -> str:
    slug = slugify(name)
    if not slug:
        raise AppError("Room name must contain letters or digits", status.HTTP_400_BAD_REQUEST)
    return slug


def create_room(db: Session, body: RoomCreate) -> Room:
    values = body.model_dump()
    values["slug"] = _slug_for(body.name)
    crud.ensure_exists(db, Floor, body.floor_id, "floor")
    return crud.create_item(db, Room, values, unique_fields=ROOM_UNIQUE_FIELDS)


def update_room(db: Session, room: Room, body: RoomUpdate) -> Room:
    values = crud.drop_required_nulls(Room, body.model_dump(exclude_unset=True))
    if "name" in values:
        values["slug"] = _slug_for(values["name"])
    if "floor_id" in values:
        crud.ensure_exists(db, Floor, values["floor_id"], "floor")
    return crud.update_item(db, room, values, unique_fields=ROOM_UNIQUE_FIELDS)


def get_room_by_slug(db: Session, slug: str) -> Room:
    room = db.query(Room).filter(Room.slug == slug).first()
    if room is None:
        raise crud.not_found_error("room")
    return room

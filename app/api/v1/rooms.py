"""Rooms: public listing and lookup by id or slug, admin/owner writes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import restrict_to
from app.api.v1.params import Page
from app.core.database import get_db
from app.models import Room
from app.schemas.auth import CurrentUser
from app.schemas.common import ItemResponse, ListResponse
from app.schemas.room import RoomCreate, RoomOut, RoomType, RoomUpdate
from app.services import crud
from app.services.rooms import create_room, get_room_by_slug, update_room

router = APIRouter()

Manager = Annotated[CurrentUser, Depends(restrict_to("admin", "owner"))]


@router.get("", response_model=ListResponse[RoomOut])
def list_rooms(
    db: Annotated[Session, Depends(get_db)],
    params: Page,
    type: RoomType | None = None,
    floor_id: Annotated[int | None, Query(alias="floorId")] = None,
) -> ListResponse[RoomOut]:
    """List rooms, optionally filtered by type and floor. Sort with e.g. `sort=-price`."""
    rooms = crud.list_items(db, Room, params, {"type": type, "floor_id": floor_id})
    return ListResponse[RoomOut](results=len(rooms), data=[RoomOut.model_validate(r) for r in rooms])


@router.get("/slug/{slug}", response_model=ItemResponse[RoomOut])
def get_room_slug(slug: str, db: Annotated[Session, Depends(get_db)]) -> ItemResponse[RoomOut]:
    return ItemResponse[RoomOut](data=RoomOut.model_validate(get_room_by_slug(db, slug)))


@router.get("/{room_id}", response_model=ItemResponse[RoomOut])
def get_room(room_id: int, db: Annotated[Session, Depends(get_db)]) -> ItemResponse[RoomOut]:
    room = crud.get_item(db, Room, room_id, "room")
    return ItemResponse[RoomOut](data=RoomOut.model_validate(room))


@router.post("", response_model=ItemResponse[RoomOut], status_code=status.HTTP_201_CREATED)
def post_room(
    body: RoomCreate,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[RoomOut]:
    return ItemResponse[RoomOut](data=RoomOut.model_validate(create_room(db, body)))


@router.patch("/{room_id}", response_model=ItemResponse[RoomOut])
def patch_room(
    room_id: int,
    body: RoomUpdate,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[RoomOut]:
    room = crud.get_item(db, Room, room_id, "room")
    return ItemResponse[RoomOut](data=RoomOut.model_validate(update_room(db, room, body)))


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_room(
    room_id: int,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> None:
    crud.delete_item(db, crud.get_item(db, Room, room_id, "room"))

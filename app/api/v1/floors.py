"""Floors: public reads, admin/owner writes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.auth import restrict_to
from app.api.v1.params import Page
from app.core.database import get_db
from app.models import Floor
from app.schemas.auth import CurrentUser
from app.schemas.common import ItemResponse, ListResponse
from app.schemas.floor import FloorCreate, FloorOut, FloorUpdate
from app.services import crud

router = APIRouter()

Manager = Annotated[CurrentUser, Depends(restrict_to("admin", "owner"))]
FLOOR_UNIQUE_FIELDS = ("number",)


@router.get("", response_model=ListResponse[FloorOut])
def list_floors(
    db: Annotated[Session, Depends(get_db)],
    params: Page,
) -> ListResponse[FloorOut]:
    floors = crud.list_items(db, Floor, params)
    return ListResponse[FloorOut](results=len(floors), data=[FloorOut.model_validate(f) for f in floors])


@router.get("/{floor_id}", response_model=ItemResponse[FloorOut])
def get_floor(floor_id: int, db: Annotated[Session, Depends(get_db)]) -> ItemResponse[FloorOut]:
    floor = crud.get_item(db, Floor, floor_id, "floor")
    return ItemResponse[FloorOut](data=FloorOut.model_validate(floor))


@router.post("", response_model=ItemResponse[FloorOut], status_code=status.HTTP_201_CREATED)
def create_floor(
    body: FloorCreate,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[FloorOut]:
    floor = crud.create_item(db, Floor, body.model_dump(), unique_fields=FLOOR_UNIQUE_FIELDS)
    return ItemResponse[FloorOut](data=FloorOut.model_validate(floor))


@router.patch("/{floor_id}", response_model=ItemResponse[FloorOut])
def update_floor(
    floor_id: int,
    body: FloorUpdate,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[FloorOut]:
    floor = crud.get_item(db, Floor, floor_id, "floor")
    values = body.model_dump(exclude_unset=True, exclude_none=True)
    floor = crud.update_item(db, floor, values, unique_fields=FLOOR_UNIQUE_FIELDS)
    return ItemResponse[FloorOut](data=FloorOut.model_validate(floor))


@router.delete("/{floor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_floor(
    floor_id: int,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> None:
    crud.delete_item(db, crud.get_item(db, Floor, floor_id, "floor"))

"""Visitor log (admin/owner only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import restrict_to
from app.api.v1.params import Page
from app.core.database import get_db
from app.models import Room, Visitor
from app.schemas.auth import CurrentUser
from app.schemas.common import ItemResponse, ListResponse
from app.schemas.visitor import VisitorCreate, VisitorOut, VisitorUpdate
from app.services import crud

router = APIRouter()

Manager = Annotated[CurrentUser, Depends(restrict_to("admin", "owner"))]


@router.get("", response_model=ListResponse[VisitorOut])
def list_visitors(
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
    params: Page,
    room_id: Annotated[int | None, Query(alias="roomId")] = None,
) -> ListResponse[VisitorOut]:
    visitors = crud.list_items(db, Visitor, params, {"room_id": room_id})
    return ListResponse[VisitorOut](
        results=len(visitors),
        data=[VisitorOut.model_validate(v) for v in visitors],
    )


@router.get("/{visitor_id}", response_model=ItemResponse[VisitorOut])
def get_visitor(
    visitor_id: int,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[VisitorOut]:
    visitor = crud.get_item(db, Visitor, visitor_id, "visitor")
    return ItemResponse[VisitorOut](data=VisitorOut.model_validate(visitor))


@router.post("", response_model=ItemResponse[VisitorOut], status_code=status.HTTP_201_CREATED)
def create_visitor(
    body: VisitorCreate,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[VisitorOut]:
    crud.ensure_exists(db, Room, body.room_id, "room")
    visitor = crud.create_item(db, Visitor, body.model_dump())
    return ItemResponse[VisitorOut](data=VisitorOut.model_validate(visitor))


@router.patch("/{visitor_id}", response_model=ItemResponse[VisitorOut])
def update_visitor(
    visitor_id: int,
    body: VisitorUpdate,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[VisitorOut]:
    visitor = crud.get_item(db, Visitor, visitor_id, "visitor")
    values = crud.drop_required_nulls(Visitor, body.model_dump(exclude_unset=True))
    if "room_id" in values:
        crud.ensure_exists(db, Room, values["room_id"], "room")
    visitor = crud.update_item(db, visitor, values)
    return ItemResponse[VisitorOut](data=VisitorOut.model_validate(visitor))


@router.delete("/{visitor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_visitor(
    visitor_id: int,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> None:
    crud.delete_item(db, crud.get_item(db, Visitor, visitor_id, "visitor"))

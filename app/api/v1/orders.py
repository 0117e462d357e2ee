"""Orders (bookings): any logged-in user books for themselves; admin/owner manage all."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, restrict_to
from app.api.v1.params import Page
from app.core.database import get_db
from app.models import Order
from app.schemas.auth import CurrentUser
from app.schemas.common import ItemResponse, ListResponse
from app.schemas.order import OrderCreate, OrderOut, OrderUpdate
from app.services import crud
from app.services.orders import create_order, update_order

router = APIRouter()

Manager = Annotated[CurrentUser, Depends(restrict_to("admin", "owner"))]
LoggedIn = Annotated[CurrentUser, Depends(get_current_user)]


@router.post("", response_model=ItemResponse[OrderOut], status_code=status.HTTP_201_CREATED)
def post_order(
    body: OrderCreate,
    current_user: LoggedIn,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[OrderOut]:
    """
    Book a room for the caller.

    totalPrice defaults to the room's daily price times the number of started
    days; a voucherCode applies its percentage discount.
    """
    order = create_order(db, current_user.id, body)
    return ItemResponse[OrderOut](data=OrderOut.model_validate(order))


@router.get("/my", response_model=ListResponse[OrderOut])
def list_my_orders(
    current_user: LoggedIn,
    db: Annotated[Session, Depends(get_db)],
    params: Page,
) -> ListResponse[OrderOut]:
    orders = crud.list_items(db, Order, params, {"user_id": current_user.id})
    return ListResponse[OrderOut](results=len(orders), data=[OrderOut.model_validate(o) for o in orders])


@router.get("", response_model=ListResponse[OrderOut])
def list_orders(
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
    params: Page,
    user_id: Annotated[int | None, Query(alias="userId")] = None,
    room_id: Annotated[int | None, Query(alias="roomId")] = None,
) -> ListResponse[OrderOut]:
    orders = crud.list_items(db, Order, params, {"user_id": user_id, "room_id": room_id})
    return ListResponse[OrderOut](results=len(orders), data=[OrderOut.model_validate(o) for o in orders])


@router.get("/{order_id}", response_model=ItemResponse[OrderOut])
def get_order(
    order_id: int,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[OrderOut]:
    order = crud.get_item(db, Order, order_id, "order")
    return ItemResponse[OrderOut](data=OrderOut.model_validate(order))


@router.patch("/{order_id}", response_model=ItemResponse[OrderOut])
def patch_order(
    order_id: int,
    body: OrderUpdate,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[OrderOut]:
    order = crud.get_item(db, Order, order_id, "order")
    return ItemResponse[OrderOut](data=OrderOut.model_validate(update_order(db, order, body)))


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(
    order_id: int,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> None:
    crud.delete_item(db, crud.get_item(db, Order, order_id, "order"))

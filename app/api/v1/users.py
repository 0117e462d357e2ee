"""Admin user management (list, inspect, activate/update, delete)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import restrict_to
from app.api.v1.params import Page
from app.core.database import get_db
from app.models import User
from app.schemas.auth import CurrentUser, UserOut, UserUpdate
from app.schemas.common import ItemResponse, ListResponse
from app.services import crud
from app.services.users import update_user

router = APIRouter()

AdminUser = Annotated[CurrentUser, Depends(restrict_to("admin"))]


@router.get("", response_model=ListResponse[UserOut])
def list_users(
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
    params: Page,
    role: str | None = None,
    is_active: Annotated[bool | None, Query(alias="isActive")] = None,
) -> ListResponse[UserOut]:
    """List users (admin only), optionally filtered by role and activation state."""
    users = crud.list_items(db, User, params, {"role": role, "is_active": is_active})
    return ListResponse[UserOut](
        results=len(users),
        data=[UserOut.model_validate(u) for u in users],
    )


@router.get("/{user_id}", response_model=ItemResponse[UserOut])
def get_user(
    user_id: int,
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[UserOut]:
    user = crud.get_item(db, User, user_id, "user")
    return ItemResponse[UserOut](data=UserOut.model_validate(user))


@router.patch("/{user_id}", response_model=ItemResponse[UserOut])
def patch_user(
    user_id: int,
    body: UserUpdate,
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[UserOut]:
    """Update profile fields, role or activation (`isActive: true` activates a signup)."""
    user = crud.get_item(db, User, user_id, "user")
    user = update_user(db, user, body)
    return ItemResponse[UserOut](data=UserOut.model_validate(user))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    _admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
) -> None:
    user = crud.get_item(db, User, user_id, "user")
    crud.delete_item(db, user)

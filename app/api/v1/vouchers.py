"""Discount vouchers: admin/owner management, code lookup for any logged-in user."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, restrict_to
from app.api.v1.params import Page
from app.core.database import get_db
from app.models import Voucher
from app.schemas.auth import CurrentUser
from app.schemas.common import ItemResponse, ListResponse
from app.schemas.voucher import VoucherCreate, VoucherOut, VoucherUpdate
from app.services import crud
from app.services.orders import find_voucher

router = APIRouter()

Manager = Annotated[CurrentUser, Depends(restrict_to("admin", "owner"))]
VOUCHER_UNIQUE_FIELDS = ("code",)


@router.get("", response_model=ListResponse[VoucherOut])
def list_vouchers(
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
    params: Page,
) -> ListResponse[VoucherOut]:
    vouchers = crud.list_items(db, Voucher, params)
    return ListResponse[VoucherOut](
        results=len(vouchers),
        data=[VoucherOut.model_validate(v) for v in vouchers],
    )


@router.get("/code/{code}", response_model=ItemResponse[VoucherOut])
def get_voucher_by_code(
    code: str,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[VoucherOut]:
    """Check a voucher code before booking (case-insensitive)."""
    return ItemResponse[VoucherOut](data=VoucherOut.model_validate(find_voucher(db, code)))


@router.get("/{voucher_id}", response_model=ItemResponse[VoucherOut])
def get_voucher(
    voucher_id: int,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[VoucherOut]:
    voucher = crud.get_item(db, Voucher, voucher_id, "voucher")
    return ItemResponse[VoucherOut](data=VoucherOut.model_validate(voucher))


@router.post("", response_model=ItemResponse[VoucherOut], status_code=status.HTTP_201_CREATED)
def create_voucher(
    body: VoucherCreate,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[VoucherOut]:
    voucher = crud.create_item(db, Voucher, body.model_dump(), unique_fields=VOUCHER_UNIQUE_FIELDS)
    return ItemResponse[VoucherOut](data=VoucherOut.model_validate(voucher))


@router.patch("/{voucher_id}", response_model=ItemResponse[VoucherOut])
def update_voucher(
    voucher_id: int,
    body: VoucherUpdate,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[VoucherOut]:
    voucher = crud.get_item(db, Voucher, voucher_id, "voucher")
    values = body.model_dump(exclude_unset=True, exclude_none=True)
    voucher = crud.update_item(db, voucher, values, unique_fields=VOUCHER_UNIQUE_FIELDS)
    return ItemResponse[VoucherOut](data=VoucherOut.model_validate(voucher))


@router.delete("/{voucher_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_voucher(
    voucher_id: int,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> None:
    crud.delete_item(db, crud.get_item(db, Voucher, voucher_id, "voucher"))

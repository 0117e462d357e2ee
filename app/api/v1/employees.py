"""Employees (admin/owner only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.auth import restrict_to
from app.api.v1.params import Page
from app.core.database import get_db
from app.models import Employee, User
from app.schemas.auth import CurrentUser
from app.schemas.common import ItemResponse, ListResponse
from app.schemas.employee import EmployeeCreate, EmployeeOut, EmployeeUpdate
from app.services import crud

router = APIRouter()

Manager = Annotated[CurrentUser, Depends(restrict_to("admin", "owner"))]


@router.get("", response_model=ListResponse[EmployeeOut])
def list_employees(
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
    params: Page,
    jobdesc: str | None = None,
) -> ListResponse[EmployeeOut]:
    employees = crud.list_items(db, Employee, params, {"jobdesc": jobdesc})
    return ListResponse[EmployeeOut](
        results=len(employees),
        data=[EmployeeOut.model_validate(e) for e in employees],
    )


@router.get("/{employee_id}", response_model=ItemResponse[EmployeeOut])
def get_employee(
    employee_id: int,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[EmployeeOut]:
    employee = crud.get_item(db, Employee, employee_id, "employee")
    return ItemResponse[EmployeeOut](data=EmployeeOut.model_validate(employee))


@router.post("", response_model=ItemResponse[EmployeeOut], status_code=status.HTTP_201_CREATED)
def create_employee(
    body: EmployeeCreate,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[EmployeeOut]:
    crud.ensure_exists(db, User, body.user_id, "user")
    employee = crud.create_item(db, Employee, body.model_dump())
    return ItemResponse[EmployeeOut](data=EmployeeOut.model_validate(employee))


@router.patch("/{employee_id}", response_model=ItemResponse[EmployeeOut])
def update_employee(
    employee_id: int,
    body: EmployeeUpdate,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> ItemResponse[EmployeeOut]:
    employee = crud.get_item(db, Employee, employee_id, "employee")
    values = body.model_dump(exclude_unset=True, exclude_none=True)
    crud.ensure_exists(db, User, values.get("user_id"), "user")
    employee = crud.update_item(db, employee, values)
    return ItemResponse[EmployeeOut](data=EmployeeOut.model_validate(employee))


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(
    employee_id: int,
    _user: Manager,
    db: Annotated[Session, Depends(get_db)],
) -> None:
    crud.delete_item(db, crud.get_item(db, Employee, employee_id, "employee"))

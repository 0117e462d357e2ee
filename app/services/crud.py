"""Generic create/read/update/delete helpers shared by the resource routers.

All helpers raise AppError for client-facing failures (404 missing row,
400 duplicate unique value or unknown sort field) and commit on writes.
"""

import logging
from typing import Any, TypeVar

from fastapi import status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from app.core.errors import AppError, is_unique_violation
from app.models import Base
from app.schemas.common import PageParams
from app.shared.text import camel_to_snake

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def duplicate_error(field: str) -> AppError:
    return AppError(f"Duplicate field value: {field}. Please use another value!", status.HTTP_400_BAD_REQUEST)


def not_found_error(name: str) -> AppError:
    return AppError(f"No {name} found with that ID", status.HTTP_404_NOT_FOUND)


def apply_sort(query: Query, model: type[ModelT], sort: str | None) -> Query:
    """Order by a comma-separated list of fields ('-price,name'); defaults to id."""
    if not sort:
        return query.order_by(model.id)
    columns = model.__table__.columns
    clauses = []
    for raw in sort.split(","):
        raw = raw.strip()
        if not raw:
            continue
        descending = raw.startswith("-")
        name = camel_to_snake(raw.lstrip("-"))
        if name not in columns:
            raise AppError(f"Invalid sort field: {raw.lstrip('-')}", status.HTTP_400_BAD_REQUEST)
        column = getattr(model, name)
        clauses.append(column.desc() if descending else column.asc())
    return query.order_by(*clauses, model.id)


def list_items(
    db: Session,
    model: type[ModelT],
    params: PageParams,
    filters: dict[str, Any] | None = None,
) -> list[ModelT]:
    """Return one page of rows matching equality filters (None values are ignored)."""
    query = db.query(model)
    for name, value in (filters or {}).items():
        if value is not None:
            query = query.filter(getattr(model, name) == value)
    query = apply_sort(query, model, params.sort)
    return query.offset((params.page - 1) * params.limit).limit(params.limit).all()


def drop_required_nulls(model: type[ModelT], values: dict[str, Any]) -> dict[str, Any]:
    """Drop explicit nulls aimed at NOT NULL columns; for those, null means "leave unchanged"."""
    columns = model.__table__.columns
    return {
        name: value
        for name, value in values.items()
        if value is not None or name not in columns or columns[name].nullable
    }


def get_item(db: Session, model: type[ModelT], item_id: int, name: str) -> ModelT:
    row = db.get(model, item_id)
    if row is None:
        raise not_found_error(name)
    return row


def ensure_exists(db: Session, model: type[ModelT], item_id: int | None, name: str) -> None:
    """Raise 404 when a referenced row is missing; None references are allowed."""
    if item_id is not None and db.get(model, item_id) is None:
        raise not_found_error(name)


def check_unique(
    db: Session,
    model: type[ModelT],
    values: dict[str, Any],
    unique_fields: tuple[str, ...],
    exclude_id: int | None = None,
) -> None:
    """Raise the duplicate error for the first unique field already taken by another row."""
    for field in unique_fields:
        if values.get(field) is None:
            continue
        query = db.query(model.id).filter(getattr(model, field) == values[field])
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)
        if query.first() is not None:
            raise duplicate_error(field)


def _commit(db: Session, unique_fields: tuple[str, ...]) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if not is_unique_violation(exc):
            raise
        # Lost a race against a concurrent insert; the unique index is authoritative.
        message = str(exc.orig)
        field = next((f for f in unique_fields if f in message), unique_fields[0] if unique_fields else "value")
        logger.info("Unique violation on commit: %s", field)
        raise duplicate_error(field) from exc


def create_item(
    db: Session,
    model: type[ModelT],
    values: dict[str, Any],
    unique_fields: tuple[str, ...] = (),
) -> ModelT:
    check_unique(db, model, values, unique_fields)
    row = model(**values)
    db.add(row)
    _commit(db, unique_fields)
    db.refresh(row)
    return row


def update_item(
    db: Session,
    row: ModelT,
    values: dict[str, Any],
    unique_fields: tuple[str, ...] = (),
) -> ModelT:
    check_unique(db, type(row), values, unique_fields, exclude_id=row.id)
    for name, value in values.items():
        setattr(row, name, value)
    _commit(db, unique_fields)
    db.refresh(row)
    return row


def delete_item(db: Session, row: Base) -> None:
    db.delete(row)
    db.commit()

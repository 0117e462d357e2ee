"""Health check endpoint with database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.config import Settings, get_app_settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Report environment, API version and whether the database answers.

    GET /api/test is the plain liveness probe and never touches the database.
    """
    return HealthResponse(
        environment=settings.APP_ENV,
        version=request.app.version,
        database="connected" if check_db_connected(db) else "disconnected",
    )

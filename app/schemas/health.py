"""Health check response."""

from typing import Literal

from pydantic import Field

from app.schemas.common import ApiModel


class HealthResponse(ApiModel):
    """Service environment and database reachability, for load balancers and monitoring."""

    status: Literal["success"] = "success"
    environment: Literal["dev", "prod"]
    version: str
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a SELECT 1 against the configured database",
    )

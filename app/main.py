"""FastAPI application entrypoint. No business logic; only wiring and middleware.

Settings, the database handle, the rate limiter and the session cookie policy
are created once in create_app() and attached to app.state. Tests build their
own app with create_app(Settings(...)).
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.v1 import router as v1_router
from app.core.config import Settings, get_settings
from app.core.cookies import SessionCookiePolicy
from app.core.database import Database
from app.core.errors import register_exception_handlers
from app.core.limiter import api_rate_limit, build_limiter
from app.core.logging import configure_logging
from app.middleware import (
    ParameterPollutionMiddleware,
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    RequestSizeLimitMiddleware,
    SanitizeBodyMiddleware,
    SecurityHeadersMiddleware,
    UnhandledErrorMiddleware,
)
from app.schemas.common import StatusResponse

logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).resolve().parent / "public"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    db: Database = app.state.db
    if db.url.startswith("sqlite"):
        # Postgres schemas are managed by Alembic; SQLite is created on the fly.
        db.create_all()
    logger.info("Application started (env=%s)", app.state.settings.APP_ENV)
    yield
    db.dispose()
    logger.info("Application shut down")


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Workspace Booking API",
        version="1.0.0",
        debug=settings.DEBUG,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = database or Database(settings.DATABASE_URL, echo=settings.DEBUG)
    app.state.limiter = build_limiter(settings)
    app.state.cookie_policy = SessionCookiePolicy.from_settings(settings)

    register_exception_handlers(app)

    # Middleware: last added = outermost. Request order:
    # CORS → security headers → unhandled errors → logging → rate limit → size limit
    # → sanitize → HPP → gzip → routes.
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(ParameterPollutionMiddleware, whitelist=settings.HPP_WHITELIST)
    app.add_middleware(SanitizeBodyMiddleware)
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.MAX_BODY_BYTES)
    app.add_middleware(
        RateLimitMiddleware,
        limiter=app.state.limiter,
        limit=api_rate_limit(settings),
        prefix="/api",
    )
    if settings.APP_ENV == "dev":
        app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CLIENT_SIDE_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/api/test", response_model=StatusResponse, tags=["health"])
    def liveness() -> StatusResponse:
        """Liveness probe; does not touch the database."""
        return StatusResponse(message="Backend is connected successfully")

    app.mount("/public", StaticFiles(directory=PUBLIC_DIR, check_dir=False), name="public")

    return app


def _create_default_app() -> FastAPI:
    load_dotenv()
    return create_app()


app = _create_default_app()

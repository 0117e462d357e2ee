"""Application error type and centralized exception handlers.

Every error leaves the API as {"status": "fail"|"error", "message": ...}.
Register with register_exception_handlers(app).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests! Please try again in an hour!"
INTERNAL_ERROR_MESSAGE = "Something went very wrong!"
UNIQUE_VIOLATION_SQLSTATE = "23505"


class AppError(Exception):
    """Expected, client-facing error with an HTTP status code."""

    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def status(self) -> str:
        return "fail" if 400 <= self.status_code < 500 else "error"

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "message": self.message}


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None, **extra: Any
) -> JSONResponse:
    """Build the uniform error envelope."""
    body: dict[str, Any] = {
        "status": "fail" if 400 <= status_code < 500 else "error",
        "message": message,
    }
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _format_validation_errors(errors: list[dict[str, Any]]) -> str:
    parts = []
    for err in errors:
        msg = str(err.get("msg", "Invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "Invalid input data. " + ". ".join(parts)


def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("AppError %s on %s %s: %s", exc.status_code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 with a readable summary of the validation errors."""
    return error_response(status.HTTP_400_BAD_REQUEST, _format_validation_errors(exc.errors()))


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unmatched routes become the route-not-found message; other HTTP errors keep their detail."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        return error_response(
            status.HTTP_404_NOT_FOUND,
            f"Can't find {target} on this server!",
        )
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


def is_unique_violation(exc: IntegrityError) -> bool:
    """True for unique-constraint failures; NOT NULL and foreign-key failures are not."""
    orig = exc.orig
    # psycopg2 exposes the SQLSTATE; sqlite3 only has the message.
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return "unique" in str(orig).lower()


def _integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    if not is_unique_violation(exc):
        return internal_error_response(request, exc)
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Duplicate field value. Please use another value!",
    )


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log exc and return 500; include the exception text only outside production."""
    logger.exception("Unhandled exception on %s %s: %s", request.method, request.url.path, exc)
    settings = request.app.state.settings
    if settings.APP_ENV == "dev":
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            INTERNAL_ERROR_MESSAGE,
            error=repr(exc),
        )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app.
    """
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(IntegrityError, _integrity_error_handler)
    app.add_exception_handler(Exception, internal_error_response)

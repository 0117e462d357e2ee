"""Signup, cookie/JWT login and logout, plus auth dependencies (get_current_user, restrict_to)."""

import logging
from collections.abc import Callable
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings, get_app_settings
from app.core.cookies import (
    LOGGED_OUT_VALUE,
    SESSION_COOKIE_NAME,
    SessionCookiePolicy,
    get_cookie_policy,
)
from app.core.database import get_db
from app.core.errors import AppError
from app.core.security import create_access_token, decode_access_token
from app.models import User
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    UserOut,
    UserResponse,
)
from app.schemas.common import StatusResponse
from app.services.users import INACTIVE_ACCOUNT_MESSAGE, authenticate, create_user

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)

NOT_LOGGED_IN_MESSAGE = "You are not logged in! Please log in to get access."


@router.post("/signup", response_model=UserResponse)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """
    Register a new account. The account starts inactive and must be
    activated by an administrator before login succeeds.
    """
    user = create_user(db, body)
    return UserResponse(data=UserOut.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    cookie_policy: Annotated[SessionCookiePolicy, Depends(get_cookie_policy)],
    body: LoginRequest | None = None,
) -> LoginResponse:
    """
    Authenticate with username and password.

    Returns the JWT in the body and also sets it as an httpOnly `jwt` cookie.
    API clients may send it back as `Authorization: Bearer <token>`.
    """
    body = body or LoginRequest()
    user = authenticate(db, body.username, body.password)
    token = create_access_token(sub=user.id, settings=settings)
    cookie_policy.issue(response, token, request)
    logger.info("Login succeeded: user_id=%s", user.id)
    return LoginResponse(token=token, data=UserOut.model_validate(user))


@router.api_route(
    "/logout",
    methods=["GET", "POST"],
    response_model=StatusResponse,
    response_model_exclude_none=True,
)
def logout(
    request: Request,
    response: Response,
    cookie_policy: Annotated[SessionCookiePolicy, Depends(get_cookie_policy)],
) -> StatusResponse:
    """Overwrite the session cookie with a short-lived placeholder. Always succeeds."""
    cookie_policy.clear(response, request)
    logger.info("Logout")
    return StatusResponse()


def _extract_token(request: Request, credentials: HTTPAuthorizationCredentials | None) -> str | None:
    """Bearer header wins; otherwise the session cookie, unless it holds the logout placeholder."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    cookie = request.cookies.get(SESSION_COOKIE_NAME)
    if cookie and cookie != LOGGED_OUT_VALUE:
        return cookie
    return None


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CurrentUser:
    """Dependency: require a valid JWT (header or cookie) for an active user. Raises 401 otherwise."""
    token = _extract_token(request, credentials)
    if token is None:
        raise AppError(NOT_LOGGED_IN_MESSAGE, status.HTTP_401_UNAUTHORIZED)
    try:
        payload = decode_access_token(token, settings)
    except jwt.ExpiredSignatureError:
        raise AppError("Your token has expired! Please log in again.", status.HTTP_401_UNAUTHORIZED)
    except jwt.PyJWTError:
        raise AppError("Invalid token! Please log in again.", status.HTTP_401_UNAUTHORIZED)
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AppError("Invalid token! Please log in again.", status.HTTP_401_UNAUTHORIZED)
    user = db.get(User, user_id)
    if user is None:
        raise AppError(
            "The user belonging to this token no longer exists.",
            status.HTTP_401_UNAUTHORIZED,
        )
    if not user.is_active:
        raise AppError(INACTIVE_ACCOUNT_MESSAGE, status.HTTP_401_UNAUTHORIZED)
    return CurrentUser(id=user.id, username=user.username, role=user.role)


def restrict_to(*roles: str) -> Callable[..., CurrentUser]:
    """Dependency factory: require an authenticated user with one of roles. Raises 403 otherwise."""

    def _require_role(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role not in roles:
            raise AppError(
                "You do not have permission to perform this action",
                status.HTTP_403_FORBIDDEN,
            )
        return current_user

    return _require_role


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Return the logged-in user's profile."""
    user = db.get(User, current_user.id)
    return UserResponse(data=UserOut.model_validate(user))

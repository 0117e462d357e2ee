"""User accounts: signup, credential checks and admin updates."""

import logging

from fastapi import status
from sqlalchemy.orm import Session

from app.core.errors import AppError
from app.core.security import hash_password, verify_password
from app.models import User
from app.schemas.auth import SignupRequest, UserUpdate
from app.services import crud

logger = logging.getLogger(__name__)

USER_UNIQUE_FIELDS = ("username", "email")

MISSING_CREDENTIALS_MESSAGE = "Please provide a username and a password!"
INVALID_CREDENTIALS_MESSAGE = "Incorrect username or password!"
INACTIVE_ACCOUNT_MESSAGE = "Your account is not activated yet! Please check your email!"


def create_user(
    db: Session,
    body: SignupRequest,
    role: str = "user",
    is_active: bool = False,
) -> User:
    """Persist a new user; the password is hashed here and nowhere else."""
    values = body.model_dump(exclude={"password", "password_confirm"})
    values["password_hash"] = hash_password(body.password)
    values["role"] = role
    values["is_active"] = is_active
    user = crud.create_item(db, User, values, unique_fields=USER_UNIQUE_FIELDS)
    logger.info("User created: id=%s username=%s role=%s", user.id, user.username, user.role)
    return user


def authenticate(db: Session, username: str | None, password: str | None) -> User:
    """
    Return the user for valid credentials of an active account.

    Unknown usernames and wrong passwords fail with the same 401 message;
    an inactive account with correct credentials fails with its own 401.
    """
    if not username or not password:
        raise AppError(MISSING_CREDENTIALS_MESSAGE, status.HTTP_400_BAD_REQUEST)

    user = db.query(User).filter(User.username == username).first()
    if not verify_password(password, user.password_hash if user else None):
        logger.info("Login failed: username=%s reason=%s", username, "bad_credentials")
        raise AppError(INVALID_CREDENTIALS_MESSAGE, status.HTTP_401_UNAUTHORIZED)
    if not user.is_active:
        logger.info("Login failed: username=%s reason=%s", username, "inactive")
        raise AppError(INACTIVE_ACCOUNT_MESSAGE, status.HTTP_401_UNAUTHORIZED)
    return user


def update_user(db: Session, user: User, body: UserUpdate) -> User:
    values = crud.drop_required_nulls(User, body.model_dump(exclude_unset=True))
    user = crud.update_item(db, user, values, unique_fields=USER_UNIQUE_FIELDS)
    logger.info("User updated: id=%s fields=%s", user.id, sorted(values))
    return user

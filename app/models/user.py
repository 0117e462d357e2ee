"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, func

from app.models.base import Base

USER_ROLES = ("admin", "owner", "user")


class User(Base):
    """
    User account for cookie/JWT authentication and role-based access control.

    role: 'admin', 'owner' or 'user'. Accounts created through signup start
    inactive and cannot log in until an admin activates them.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    address = Column(String(255), nullable=False, default="")
    birthdate = Column(Date, nullable=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")
    is_active = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

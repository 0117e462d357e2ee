"""Core app configuration, database, security and error handling."""

from app.core.config import Settings, get_app_settings, get_settings
from app.core.database import Database, get_db
from app.core.errors import AppError

__all__ = ["AppError", "Database", "Settings", "get_app_settings", "get_db", "get_settings"]

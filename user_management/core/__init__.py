"""Settings, database session factory and credential hashing."""

from user_management.core.config import Settings, get_settings, settings
from user_management.core.database import SessionLocal, build_engine, get_db
from user_management.core.security import hash_password, verify_password

__all__ = [
    "SessionLocal",
    "Settings",
    "build_engine",
    "get_db",
    "get_settings",
    "hash_password",
    "settings",
    "verify_password",
]

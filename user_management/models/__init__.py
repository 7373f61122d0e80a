"""SQLAlchemy ORM models."""

from user_management.models.account import Account
from user_management.models.base import Base

__all__ = ["Account", "Base"]

"""ORM model for registered accounts."""

from sqlalchemy import Column, Enum, Integer, String

from user_management.models.base import Base
from user_management.schemas.accounts import Role


class Account(Base):
    """
    Persisted identity record.

    username is unique at the store level; register relies on that index
    rather than on its own existence check.
    """

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="account_role", native_enum=False, length=16),
        nullable=False,
        default=Role.USER,
    )
    email_id = Column(String(255), nullable=True)
    phone_number = Column(String(32), nullable=True)

    def __repr__(self) -> str:
        return f"Account(id={self.id!r}, username={self.username!r}, role={self.role!r})"

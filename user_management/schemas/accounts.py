"""Request/response schemas for account endpoints."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from user_management.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)

PHONE_MAX_LEN = 32


class Role(Enum):
    """Closed set of account roles. ADMIN holds every USER privilege.

    Members never compare equal to their names; parse strings with Role(name).
    """

    ADMIN = "ADMIN"
    USER = "USER"


class RegisterRequest(BaseModel):
    """Payload for account registration. The password is hashed before storage."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        description="Unique username",
    )
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        repr=False,
        description="Plain-text password; never stored or returned",
    )
    role: Role = Field(..., description="ADMIN or USER")
    email_id: EmailStr | None = Field(default=None, description="Email address")
    phone_number: str | None = Field(default=None, max_length=PHONE_MAX_LEN, description="Phone number")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username must not be blank")
        return v

    @field_validator("email_id", mode="before")
    @classmethod
    def blank_email_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()


class AccountView(BaseModel):
    """Public projection of an account. Carries no credential material."""

    username: str
    role: Role
    email_id: str | None = None
    phone_number: str | None = None

    model_config = ConfigDict(from_attributes=True)


class AccountResponse(BaseModel):
    """Outcome of a single-account operation (register, fetch, remove)."""

    code: int = Field(..., description="Stable outcome code")
    message: str = Field(..., description="Human-readable outcome message")
    user: AccountView | None = Field(default=None, description="Account view when one applies")


class AccountListResponse(BaseModel):
    """Outcome of listing all accounts."""

    code: int
    message: str
    users: list[AccountView] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Body for validation and processing failures."""

    code: int
    message: str
    errors: dict[str, str] | None = Field(
        default=None,
        description="Per-field validation messages",
    )

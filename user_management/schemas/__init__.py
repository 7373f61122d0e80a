"""Pydantic request/response schemas."""

from user_management.schemas.accounts import (
    AccountListResponse,
    AccountResponse,
    AccountView,
    ErrorResponse,
    RegisterRequest,
    Role,
)
from user_management.schemas.health import HealthResponse

__all__ = [
    "AccountListResponse",
    "AccountResponse",
    "AccountView",
    "ErrorResponse",
    "HealthResponse",
    "RegisterRequest",
    "Role",
]

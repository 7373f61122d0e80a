"""Health check endpoint with database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from user_management.core.config import settings
from user_management.core.database import check_db_connected, get_db
from user_management.schemas.health import HealthResponse

API_VERSION = "v1"

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Return service status and whether the account store answers."""
    db_status = "connected" if check_db_connected(db) else "disconnected"
    return HealthResponse(
        environment=settings.APP_ENV,
        database=db_status,
        api_version=API_VERSION,
    )


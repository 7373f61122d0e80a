"""Opaque error responses shared by the exception handlers and middleware."""

from fastapi import status
from fastapi.responses import JSONResponse

from user_management.core.logging_setup import REQUEST_ID_HEADER
from user_management.schemas.accounts import ErrorResponse
from user_management.services.outcomes import OutcomeCode


def processing_failure_response(request_id: str | None) -> JSONResponse:
    """500 PROCESSING_FAILURE body; internal detail never reaches the caller."""
    body = ErrorResponse(
        code=OutcomeCode.PROCESSING_FAILURE.code,
        message=OutcomeCode.PROCESSING_FAILURE.default_message,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json", exclude_none=True),
        headers={REQUEST_ID_HEADER: request_id} if request_id else {},
    )

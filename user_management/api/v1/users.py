"""Account endpoints: register, fetch one, list all, remove."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from user_management.api.v1.auth import get_account_service, get_current_caller
from user_management.schemas.accounts import (
    AccountListResponse,
    AccountResponse,
    ErrorResponse,
    RegisterRequest,
)
from user_management.services.access_control import Caller
from user_management.services.accounts import AccountService
from user_management.services.outcomes import Outcome, OutcomeCode

router = APIRouter()

# The one HTTP mapping for every outcome.
HTTP_STATUS_BY_OUTCOME: dict[OutcomeCode, int] = {
    OutcomeCode.CREATED: status.HTTP_201_CREATED,
    OutcomeCode.FOUND: status.HTTP_200_OK,
    OutcomeCode.REMOVED: status.HTTP_200_OK,
    OutcomeCode.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    OutcomeCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeCode.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    OutcomeCode.VALIDATION_FAILURE: status.HTTP_400_BAD_REQUEST,
    OutcomeCode.PROCESSING_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_OUTCOME_RESPONSES = {
    status.HTTP_403_FORBIDDEN: {"model": AccountResponse},
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def _account_response(outcome: Outcome) -> JSONResponse:
    body = AccountResponse(code=outcome.code, message=outcome.message, user=outcome.account)
    return JSONResponse(
        status_code=HTTP_STATUS_BY_OUTCOME[outcome.kind],
        content=body.model_dump(mode="json"),
    )


def _list_response(outcome: Outcome) -> JSONResponse:
    if outcome.accounts is None:
        return _account_response(outcome)
    body = AccountListResponse(code=outcome.code, message=outcome.message, users=outcome.accounts)
    return JSONResponse(
        status_code=HTTP_STATUS_BY_OUTCOME[outcome.kind],
        content=body.model_dump(mode="json"),
    )


@router.post(
    "/register",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_409_CONFLICT: {"model": AccountResponse}, **_OUTCOME_RESPONSES},
)
def register_user(
    body: RegisterRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    """Register a new account. Open to anonymous callers."""
    return _account_response(service.register(Caller.anonymous(), body))


@router.get(
    "/{username}",
    response_model=AccountResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": AccountResponse}, **_OUTCOME_RESPONSES},
)
def get_user(
    username: str,
    caller: Annotated[Caller, Depends(get_current_caller)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    """Fetch one account. Callers may read their own account; admins may read any."""
    return _account_response(service.fetch(caller, username))


@router.get("", response_model=AccountListResponse, responses=_OUTCOME_RESPONSES)
def list_users(
    caller: Annotated[Caller, Depends(get_current_caller)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    """List all accounts (admin only)."""
    return _list_response(service.list_all(caller))


@router.delete(
    "/{username}",
    response_model=AccountResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": AccountResponse}, **_OUTCOME_RESPONSES},
)
def remove_user(
    username: str,
    caller: Annotated[Caller, Depends(get_current_caller)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> JSONResponse:
    """Remove an account (admin only)."""
    return _account_response(service.remove(caller, username))

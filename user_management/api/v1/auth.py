"""HTTP Basic authentication and account service dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.orm import Session

from user_management.core.database import get_db
from user_management.services.access_control import Caller
from user_management.services.accounts import AccountService
from user_management.services.identity_store import IdentityStore

security = HTTPBasic(auto_error=False)

_BASIC_CHALLENGE = {"WWW-Authenticate": "Basic"}


def get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def get_account_service(
    db: Annotated[Session, Depends(get_db)],
    request_id: Annotated[str | None, Depends(get_request_id)],
) -> AccountService:
    return AccountService.with_session(db, request_id=request_id)


def get_current_caller(
    credentials: Annotated[HTTPBasicCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    request_id: Annotated[str | None, Depends(get_request_id)],
) -> Caller:
    """Dependency: require valid Basic credentials and return the caller. Raises 401 otherwise."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers=_BASIC_CHALLENGE,
        )
    store = IdentityStore(db, request_id=request_id)
    account = store.authenticate(credentials.username, credentials.password)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
            headers=_BASIC_CHALLENGE,
        )
    return Caller.of(account.username, [account.role])

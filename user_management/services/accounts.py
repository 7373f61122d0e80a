"""Account use cases: authorize with the decision point, then call the identity store."""

import logging

from sqlalchemy.orm import Session

from user_management.schemas.accounts import RegisterRequest
from user_management.services.access_control import Caller, OperationKind, decide
from user_management.services.identity_store import IdentityStore
from user_management.services.outcomes import Outcome

logger = logging.getLogger(__name__)


class AccountService:
    """Entry point for every account operation. The store is never reached on a denial."""

    def __init__(self, store: IdentityStore, request_id: str | None = None) -> None:
        self._store = store
        self._request_id = request_id

    @classmethod
    def with_session(cls, session: Session, request_id: str | None = None) -> "AccountService":
        return cls(IdentityStore(session, request_id=request_id), request_id=request_id)

    def _denied(self, caller: Caller, operation: OperationKind, target: str | None) -> Outcome | None:
        decision = decide(caller, operation, target)
        if decision.allowed:
            return None
        logger.info(
            "Access denied",
            extra={
                "request_id": self._request_id,
                "operation": operation.value,
                "caller": caller.username,
            },
        )
        return decision.to_outcome()

    def register(self, caller: Caller, candidate: RegisterRequest) -> Outcome:
        logger.info("Processing register request", extra={"request_id": self._request_id})
        denied = self._denied(caller, OperationKind.REGISTER, candidate.username)
        if denied is not None:
            return denied
        return self._store.register(candidate)

    def fetch(self, caller: Caller, username: str) -> Outcome:
        logger.info("Processing fetch request", extra={"request_id": self._request_id})
        denied = self._denied(caller, OperationKind.FETCH_ONE, username)
        if denied is not None:
            return denied
        return self._store.fetch(username)

    def list_all(self, caller: Caller) -> Outcome:
        logger.info("Processing list request", extra={"request_id": self._request_id})
        denied = self._denied(caller, OperationKind.LIST_ALL, None)
        if denied is not None:
            return denied
        return self._store.list_all()

    def remove(self, caller: Caller, username: str) -> Outcome:
        logger.info("Processing remove request", extra={"request_id": self._request_id})
        denied = self._denied(caller, OperationKind.REMOVE, username)
        if denied is not None:
            return denied
        return self._store.remove(username)

"""Outcome taxonomy shared by every account operation.

Codes and messages are part of the public contract: clients branch on
``code``, so a code never changes meaning once released.
"""

from dataclasses import dataclass, field
from enum import Enum

from user_management.schemas.accounts import AccountView

ACCESS_DENIED_SELF_MESSAGE = "Access denied: you can only access your own data"
ACCESS_DENIED_ADMIN_MESSAGE = "Access denied: admin role required"


class OutcomeCode(Enum):
    """Symbolic outcome with its stable numeric code and default message."""

    CREATED = (5001, "Record created successfully")
    FOUND = (5002, "Record found")
    REMOVED = (5003, "Record removed successfully")
    ALREADY_EXISTS = (5004, "Record already exists")
    NOT_FOUND = (5005, "Record not found")
    ACCESS_DENIED = (403, "Access denied")
    VALIDATION_FAILURE = (7002, "Invalid request payload")
    PROCESSING_FAILURE = (7001, "Error while processing the API")

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.default_message = message

    @property
    def is_success(self) -> bool:
        return self in SUCCESS_OUTCOMES


SUCCESS_OUTCOMES = frozenset({OutcomeCode.CREATED, OutcomeCode.FOUND, OutcomeCode.REMOVED})


@dataclass(frozen=True)
class Outcome:
    """Result of a core operation: a code, a message, and the account view(s) it carries."""

    kind: OutcomeCode
    message: str = ""
    account: AccountView | None = None
    accounts: list[AccountView] | None = field(default=None)

    def __post_init__(self) -> None:
        if not self.message:
            object.__setattr__(self, "message", self.kind.default_message)

    @property
    def code(self) -> int:
        return self.kind.code

    @classmethod
    def created(cls, account: AccountView) -> "Outcome":
        return cls(OutcomeCode.CREATED, account=account)

    @classmethod
    def found(cls, account: AccountView) -> "Outcome":
        return cls(OutcomeCode.FOUND, account=account)

    @classmethod
    def found_all(cls, accounts: list[AccountView]) -> "Outcome":
        return cls(OutcomeCode.FOUND, accounts=list(accounts))

    @classmethod
    def removed(cls) -> "Outcome":
        return cls(OutcomeCode.REMOVED)

    @classmethod
    def already_exists(cls) -> "Outcome":
        return cls(OutcomeCode.ALREADY_EXISTS)

    @classmethod
    def not_found(cls) -> "Outcome":
        return cls(OutcomeCode.NOT_FOUND)

    @classmethod
    def access_denied(cls, message: str) -> "Outcome":
        return cls(OutcomeCode.ACCESS_DENIED, message=message)

"""Access control decision point for account operations.

A pure function of (caller, operation, target). Rules, first match wins:

1. REGISTER is always allowed, no identity required.
2. LIST_ALL and REMOVE are allowed only for callers holding ADMIN.
3. FETCH_ONE is allowed when the caller is the target, or holds ADMIN.
4. Anything else is denied.

Denials are decided without touching the store, so a denial never reveals
whether the target account exists.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from user_management.schemas.accounts import Role
from user_management.services.outcomes import (
    ACCESS_DENIED_ADMIN_MESSAGE,
    ACCESS_DENIED_SELF_MESSAGE,
    Outcome,
    OutcomeCode,
)


class OperationKind(Enum):
    REGISTER = "register"
    FETCH_ONE = "fetch_one"
    LIST_ALL = "list_all"
    REMOVE = "remove"


ADMIN_ONLY_OPERATIONS = frozenset({OperationKind.LIST_ALL, OperationKind.REMOVE})


@dataclass(frozen=True)
class Caller:
    """Identity of whoever invokes an operation. username is None for anonymous callers."""

    username: str | None = None
    roles: frozenset[Role] = field(default_factory=frozenset)

    @classmethod
    def anonymous(cls) -> "Caller":
        return cls()

    @classmethod
    def of(cls, username: str, roles: Iterable[Role]) -> "Caller":
        return cls(username=username, roles=frozenset(roles))

    @property
    def is_anonymous(self) -> bool:
        return self.username is None


@dataclass(frozen=True)
class Decision:
    allowed: bool
    message: str = ""

    def to_outcome(self) -> Outcome:
        """ACCESS_DENIED outcome for a denial."""
        if self.allowed:
            raise ValueError("An allowed decision has no denial outcome")
        return Outcome.access_denied(self.message)


ALLOW = Decision(allowed=True)


def has_role(caller: Caller, role: Role) -> bool:
    """True if caller holds role, directly or through ADMIN."""
    if role in caller.roles:
        return True
    return role is Role.USER and Role.ADMIN in caller.roles


def decide(
    caller: Caller,
    operation: OperationKind,
    target_username: str | None = None,
) -> Decision:
    """Return ALLOW or a denial for caller performing operation on target_username."""
    if operation is OperationKind.REGISTER:
        return ALLOW

    if operation in ADMIN_ONLY_OPERATIONS:
        if has_role(caller, Role.ADMIN):
            return ALLOW
        return Decision(allowed=False, message=ACCESS_DENIED_ADMIN_MESSAGE)

    if operation is OperationKind.FETCH_ONE:
        if has_role(caller, Role.ADMIN):
            return ALLOW
        is_self = (
            not caller.is_anonymous
            and target_username is not None
            and caller.username == target_username
        )
        if is_self:
            return ALLOW
        return Decision(allowed=False, message=ACCESS_DENIED_SELF_MESSAGE)

    return Decision(allowed=False, message=OutcomeCode.ACCESS_DENIED.default_message)

"""Identity store gateway: the only reader and writer of account records.

Converts between stored accounts (hashed credential) and the public
AccountView (no credential). Storage faults are rolled back and surfaced as
IdentityStoreError; nothing here retries.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from user_management.core.security import DUMMY_PASSWORD_HASH, hash_password, verify_password
from user_management.models import Account
from user_management.schemas.accounts import AccountView, RegisterRequest
from user_management.services.outcomes import Outcome

logger = logging.getLogger(__name__)


class IdentityStoreError(Exception):
    """Raised when the account store fails (connection lost, unexpected constraint, etc.)."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


def to_view(account: Account) -> AccountView:
    """Public projection of a stored account."""
    return AccountView(
        username=account.username,
        role=account.role,
        email_id=account.email_id,
        phone_number=account.phone_number,
    )


class IdentityStore:
    """CRUD over the accounts table with username uniqueness."""

    def __init__(self, session: Session, request_id: str | None = None) -> None:
        self._session = session
        self._log_extra = {"request_id": request_id}

    def _get(self, username: str) -> Account | None:
        return self._session.query(Account).filter(Account.username == username).first()

    def _fail(self, action: str, exc: SQLAlchemyError) -> IdentityStoreError:
        self._session.rollback()
        logger.exception("Account store failure during %s", action, extra=self._log_extra)
        return IdentityStoreError(f"Account store failure during {action}", cause=exc)

    def register(self, candidate: RegisterRequest) -> Outcome:
        """
        Create an account unless the username is taken.

        The lookup is only an early exit; the unique index on username decides
        between concurrent registrations, and its violation maps to ALREADY_EXISTS.
        """
        username = candidate.username.strip()
        if not username:
            raise ValueError("username must not be empty")

        try:
            if self._get(username) is not None:
                logger.info("Registration rejected: username taken", extra=self._log_extra)
                return Outcome.already_exists()

            account = Account(
                username=username,
                password_hash=hash_password(candidate.password),
                role=candidate.role,
                email_id=candidate.email_id,
                phone_number=candidate.phone_number,
            )
            self._session.add(account)
            self._session.commit()
            account_id = account.id
            view = to_view(account)
        except IntegrityError as e:
            self._session.rollback()
            try:
                taken = self._get(username) is not None
            except SQLAlchemyError as lookup_error:
                raise self._fail("register", lookup_error) from lookup_error
            if taken:
                logger.info("Registration lost a race for the same username", extra=self._log_extra)
                return Outcome.already_exists()
            logger.exception("Unexpected integrity error during register", extra=self._log_extra)
            raise IdentityStoreError("Account store rejected the new account", cause=e) from e
        except SQLAlchemyError as e:
            raise self._fail("register", e) from e

        logger.info("Account created: id=%s role=%s", account_id, view.role.value, extra=self._log_extra)
        return Outcome.created(view)

    def fetch(self, username: str) -> Outcome:
        try:
            account = self._get(username)
        except SQLAlchemyError as e:
            raise self._fail("fetch", e) from e
        if account is None:
            return Outcome.not_found()
        return Outcome.found(to_view(account))

    def list_all(self) -> Outcome:
        """Every account's public view; an empty store is still FOUND."""
        try:
            accounts = self._session.query(Account).order_by(Account.id).all()
        except SQLAlchemyError as e:
            raise self._fail("list_all", e) from e
        return Outcome.found_all([to_view(a) for a in accounts])

    def remove(self, username: str) -> Outcome:
        try:
            account = self._get(username)
            if account is None:
                return Outcome.not_found()
            self._session.delete(account)
            self._session.commit()
        except SQLAlchemyError as e:
            raise self._fail("remove", e) from e
        logger.info("Account removed", extra=self._log_extra)
        return Outcome.removed()

    def authenticate(self, username: str, password: str) -> Account | None:
        """Return the account if password matches its stored hash, else None."""
        try:
            account = self._get(username)
        except SQLAlchemyError as e:
            raise self._fail("authenticate", e) from e
        if account is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            return None
        if not verify_password(password, account.password_hash):
            return None
        return account

"""
Create an account (e.g. the first admin). Run from project root:
  python -m user_management.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m user_management.scripts.create_user admin1 your-secure-password ADMIN
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from user_management.core.config import get_settings
from user_management.core.database import SessionLocal
from user_management.core.logging_setup import configure_logging
from user_management.schemas.accounts import RegisterRequest, Role
from user_management.services.accounts import AccountService
from user_management.services.access_control import Caller
from user_management.services.identity_store import IdentityStoreError
from user_management.services.outcomes import OutcomeCode

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account from the command line.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        type=str.upper,
        choices=[r.value for r in Role],
    )
    parser.add_argument("--email", dest="email_id", default=None)
    parser.add_argument("--phone", dest="phone_number", default=None)
    args = parser.parse_args(argv)

    configure_logging(get_settings())

    try:
        candidate = RegisterRequest(
            username=args.username,
            password=args.password,
            role=Role(args.role),
            email_id=args.email_id,
            phone_number=args.phone_number,
        )
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(p) for p in error["loc"])
            print(f"Invalid {field}: {error['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        outcome = AccountService.with_session(db).register(Caller.anonymous(), candidate)
    except IdentityStoreError as e:
        logger.exception("Account creation failed: %s", e.message)
        return 1
    finally:
        db.close()

    if outcome.kind is OutcomeCode.ALREADY_EXISTS:
        print(f"User '{candidate.username}' already exists.", file=sys.stderr)
        return 1
    print(f"Created user '{candidate.username}' with role '{candidate.role.value}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Create an account (e.g. the first Owner) through the account service. Run from project root:
  python -m roster.scripts.create_account EMAIL PASSWORD [role]
Example:
  python -m roster.scripts.create_account owner@example.com 'Str0ng!Pass' Owner

Under REGISTRATION_POLICY=bootstrap the role argument is ignored: the first
account of an empty directory becomes Owner, everyone else Guest.
"""
import argparse
import logging
import time
import sys

from roster.core.config import get_settings
from roster.core.database import SessionLocal
from roster.core.errors import EntryAlreadyExists, RosterError, ValidationFailed
from roster.repositories import SqlAlchemyAccountRepository
from roster.schemas.role import ROLES
from roster.services.accounts import AccountService
from roster.services.credentials import build_hasher

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
# the trailing Z in datefmt means UTC
logging.Formatter.converter = time.gmtime
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Roster account (no registration UI).")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (8-64 chars, mixed case, digit, special character)")
    parser.add_argument(
        "role",
        nargs="?",
        default="Guest",
        choices=[r.value for r in ROLES],
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    repository = SqlAlchemyAccountRepository(SessionLocal, build_hasher(settings))
    service = AccountService(repository, registration_policy=settings.REGISTRATION_POLICY)
    try:
        account = service.signup(args.email, args.password, args.role)
    except EntryAlreadyExists:
        print(f"Account '{args.email.strip().lower()}' already exists.", file=sys.stderr)
        return 1
    except ValidationFailed as e:
        for error in e.errors:
            print(error, file=sys.stderr)
        return 1
    except RosterError as e:
        logger.error("Account creation failed: %s", e.message)
        return 1
    print(f"Created account '{account.email}' ({account.id}) with role '{account.role.value}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

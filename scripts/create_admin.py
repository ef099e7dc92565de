#!/usr/bin/env python3
"""Create an admin account, or promote an existing account to admin.

Safe to run repeatedly:
    python scripts/create_admin.py --email admin@example.com
"""

import argparse
import getpass
import sys

from sqlmodel import Session

from rental_api.account.store import ensure_admin, get_account_by_email
from rental_api.auth.schemas import MIN_PASSWORD_LENGTH
from rental_api.core.logging import configure_logging
from rental_api.db.engine import engine


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--email", required=True)
    parser.add_argument(
        "--password",
        help="Password for a new account (prompted when omitted)",
    )
    args = parser.parse_args()

    configure_logging()

    with Session(engine) as session:
        password = args.password or ""
        is_new = get_account_by_email(session, args.email) is None
        if is_new and not password:
            password = getpass.getpass("Password: ")
        if is_new and len(password) < MIN_PASSWORD_LENGTH:
            print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
            return 1

        account, created = ensure_admin(session, args.email, password)
        if created:
            print(f"Admin account created: {account.email}")
        else:
            print(f"Existing account promoted to admin: {account.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

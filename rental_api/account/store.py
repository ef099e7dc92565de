"""Credential store operations over the accounts table.

All secret handling goes through this module: passwords are hashed before
the first persist and whenever they are replaced via set_password().
"""

import logging
import uuid
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from rental_api.account.exceptions import EmailExistsError
from rental_api.account.models import Account, AccountRole
from rental_api.core.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_account_by_email(session: Session, email: str) -> Account | None:
    return session.exec(
        select(Account).where(Account.email == normalize_email(email))
    ).first()


def get_account_by_id(session: Session, account_id: uuid.UUID) -> Account | None:
    return session.get(Account, account_id)


def get_account_by_reset_digest(session: Session, digest: str) -> Account | None:
    """Look up the account holding a pending reset credential digest."""
    return session.exec(
        select(Account).where(Account.reset_code_hash == digest)
    ).first()


def set_password(account: Account, new_password: str) -> None:
    """Replace the account secret. Always hashes; never stores plaintext."""
    account.password_hash = hash_password(new_password)


def check_password(account: Account, password: str) -> bool:
    return verify_password(password, account.password_hash)


def save_account(session: Session, account: Account) -> Account:
    session.add(account)
    session.commit()
    session.refresh(account)
    return account


def create_account(
    session: Session,
    email: str,
    password: str,
    *,
    role: AccountRole = AccountRole.standard,
    email_verified: bool = False,
    **profile: Any,
) -> Account:
    """Create an account with a hashed password.

    Raises:
        EmailExistsError: If the email is already registered, including
            when a concurrent insert wins the unique index race.
    """
    normalized = normalize_email(email)
    if get_account_by_email(session, normalized) is not None:
        raise EmailExistsError()

    account = Account(
        email=normalized,
        password_hash=hash_password(password),
        role=role,
        email_verified=email_verified,
        **profile,
    )
    try:
        return save_account(session, account)
    except IntegrityError as e:
        session.rollback()
        logger.info("Concurrent registration lost unique email race")
        raise EmailExistsError() from e


def delete_account(session: Session, account: Account) -> None:
    session.delete(account)
    session.commit()


def ensure_admin(session: Session, email: str, password: str) -> tuple[Account, bool]:
    """Create a verified admin account, or promote the existing one.

    An existing account keeps its password. Returns the account and
    whether it was newly created.
    """
    account = get_account_by_email(session, email)
    if account is None:
        account = create_account(
            session,
            email,
            password,
            role=AccountRole.admin,
            email_verified=True,
            username="Admin",
        )
        return account, True

    account.role = AccountRole.admin
    account.email_verified = True
    return save_account(session, account), False

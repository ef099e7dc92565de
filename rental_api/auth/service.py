"""Account authentication flows.

This module holds the credential lifecycle: registration, email
verification, login, password reset and change, and account deletion.
Route handlers stay thin and delegate here.

Every flow follows the same shape: look up the account, issue or verify a
one-time credential, mutate the account and commit once, then mint a
session token where the flow ends in a signed-in state.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import timedelta

from sqlmodel import Session

from rental_api.account import store
from rental_api.account.exceptions import AccountNotFoundError
from rental_api.account.models import Account
from rental_api.auth.codes import (
    RESET_CODE_TTL,
    RESET_TOKEN_TTL,
    VERIFICATION_CODE_TTL,
    CodePurpose,
    consume_code,
    hash_code,
    is_opaque_token,
    issue_numeric_code,
    issue_opaque_token,
)
from rental_api.auth.exceptions import (
    EmailAlreadyVerifiedError,
    EmailNotVerifiedError,
    InvalidCodeError,
    InvalidCredentialsError,
)
from rental_api.core.email import (
    EmailDeliveryError,
    send_password_reset_code_email,
    send_password_reset_link_email,
    send_verification_code_email,
)
from rental_api.core.exceptions import BadRequestError
from rental_api.core.security import create_session_token
from rental_api.core.settings import ResetDelivery, Settings

logger = logging.getLogger(__name__)


def _minutes(ttl: timedelta) -> int:
    return int(ttl.total_seconds() // 60)


@dataclass(frozen=True)
class SignedIn:
    """An authenticated account and its freshly minted session token."""

    account: Account
    token: str


@dataclass(frozen=True)
class VerificationPending:
    """Registration result while the email address is unverified."""

    email: str
    account_id: uuid.UUID


class AuthService:
    """Credential and session lifecycle for accounts."""

    def __init__(self, session: Session, settings: Settings):
        self._session = session
        self._settings = settings

    def _sign_in(self, account: Account) -> SignedIn:
        return SignedIn(
            account=account,
            token=create_session_token(account.id, self._settings),
        )

    def _send_verification_code(self, account: Account) -> None:
        code = issue_numeric_code(account, CodePurpose.verify_email)
        store.save_account(self._session, account)
        send_verification_code_email(
            account.email, code, expires_minutes=_minutes(VERIFICATION_CODE_TTL)
        )

    def register(self, email: str, password: str) -> SignedIn | VerificationPending:
        """Create an account.

        When email verification is required the account starts unverified
        and a code is emailed; mail failures are logged and do not undo
        the registration (the user can ask for a new code).
        """
        if not self._settings.require_email_verification:
            account = store.create_account(
                self._session, email, password, email_verified=True
            )
            logger.info("Registered account %s", account.id)
            return self._sign_in(account)

        account = store.create_account(self._session, email, password)
        logger.info("Registered account %s, verification pending", account.id)
        try:
            self._send_verification_code(account)
        except EmailDeliveryError:
            logger.warning(
                "Verification email failed for account %s", account.id, exc_info=True
            )
        return VerificationPending(email=account.email, account_id=account.id)

    def verify_email(self, email: str, code: str) -> SignedIn:
        """Consume the verification code and mark the email verified."""
        account = store.get_account_by_email(self._session, email)
        consume_code(account, CodePurpose.verify_email, code)
        account.email_verified = True
        store.save_account(self._session, account)
        logger.info("Email verified for account %s", account.id)
        return self._sign_in(account)

    def resend_verification(self, email: str) -> None:
        """Issue a fresh verification code, invalidating the previous one."""
        account = store.get_account_by_email(self._session, email)
        if account is None:
            raise AccountNotFoundError()
        if account.email_verified:
            raise EmailAlreadyVerifiedError()
        self._send_verification_code(account)

    def login(self, email: str, password: str) -> SignedIn:
        account = store.get_account_by_email(self._session, email)
        if account is None or not store.check_password(account, password):
            raise InvalidCredentialsError()
        if self._settings.require_email_verification and not account.email_verified:
            raise EmailNotVerifiedError()
        return self._sign_in(account)

    def forgot_password(self, email: str) -> None:
        """Start a password reset. Never reveals whether the email exists."""
        account = store.get_account_by_email(self._session, email)
        if account is None:
            logger.info("Password reset requested for unknown email")
            return

        try:
            if self._settings.reset_delivery == ResetDelivery.link:
                token = issue_opaque_token(account, CodePurpose.reset_password)
                store.save_account(self._session, account)
                send_password_reset_link_email(
                    account.email, token, expires_minutes=_minutes(RESET_TOKEN_TTL)
                )
            else:
                code = issue_numeric_code(account, CodePurpose.reset_password)
                store.save_account(self._session, account)
                send_password_reset_code_email(
                    account.email, code, expires_minutes=_minutes(RESET_CODE_TTL)
                )
        except EmailDeliveryError:
            logger.warning(
                "Password reset email failed for account %s", account.id, exc_info=True
            )

    def verify_reset_code(self, email: str, code: str) -> str:
        """Exchange a valid reset code for a single-use opaque reset token.

        The code is consumed; replaying it fails.
        """
        account = store.get_account_by_email(self._session, email)
        consume_code(account, CodePurpose.reset_password, code)
        token = issue_opaque_token(account, CodePurpose.reset_password)
        store.save_account(self._session, account)
        return token

    def reset_password(
        self,
        new_password: str,
        *,
        token: str | None = None,
        email: str | None = None,
        code: str | None = None,
    ) -> None:
        """Set a new password using a reset token or an email + code pair."""
        if token is not None:
            if not is_opaque_token(token):
                raise InvalidCodeError()
            account = store.get_account_by_reset_digest(
                self._session, hash_code(token)
            )
            presented = token
        elif email is not None and code is not None:
            account = store.get_account_by_email(self._session, email)
            presented = code
        else:
            raise BadRequestError("Either token or email and code are required")

        consume_code(account, CodePurpose.reset_password, presented)
        store.set_password(account, new_password)
        store.save_account(self._session, account)
        logger.info("Password reset for account %s", account.id)

    def change_password(
        self, account: Account, current_password: str, new_password: str
    ) -> None:
        if not store.check_password(account, current_password):
            raise InvalidCredentialsError("Current password is incorrect")
        store.set_password(account, new_password)
        store.save_account(self._session, account)
        logger.info("Password changed for account %s", account.id)

    def delete_account(self, account: Account, password: str) -> None:
        """Delete the account after re-proving the current password."""
        if not store.check_password(account, password):
            raise BadRequestError("Invalid password")
        account_id = account.id
        store.delete_account(self._session, account)
        logger.info("Deleted account %s", account_id)

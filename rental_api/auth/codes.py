"""One-time code and token issuance and verification.

Two credential shapes are supported:

- numeric codes: 6 digits, uniform over [100000, 999999], typed by the user
- opaque tokens: 32 random bytes hex-encoded, embedded in emailed links

Only the SHA-256 digest and an absolute expiry are stored on the account.
The plaintext is returned once for out-of-band delivery.
"""

import hashlib
import hmac
import re
import secrets
from datetime import UTC, datetime, timedelta
from enum import Enum

from rental_api.account.models import Account
from rental_api.auth.exceptions import InvalidCodeError

VERIFICATION_CODE_TTL = timedelta(minutes=30)
RESET_CODE_TTL = timedelta(minutes=15)
RESET_TOKEN_TTL = timedelta(minutes=60)

_CODE_MIN = 100_000
_CODE_MAX = 999_999
_TOKEN_BYTES = 32
_TOKEN_RE = re.compile(r"[0-9a-f]{64}")


class CodePurpose(str, Enum):
    verify_email = "verify_email"
    reset_password = "reset_password"


# Account columns holding (digest, expiry) per purpose
_FIELDS: dict[CodePurpose, tuple[str, str]] = {
    CodePurpose.verify_email: (
        "verification_code_hash",
        "verification_code_expires_at",
    ),
    CodePurpose.reset_password: ("reset_code_hash", "reset_code_expires_at"),
}

_NUMERIC_CODE_TTL: dict[CodePurpose, timedelta] = {
    CodePurpose.verify_email: VERIFICATION_CODE_TTL,
    CodePurpose.reset_password: RESET_CODE_TTL,
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are always UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def generate_numeric_code() -> str:
    return str(_CODE_MIN + secrets.randbelow(_CODE_MAX - _CODE_MIN + 1))


def generate_opaque_token() -> str:
    return secrets.token_hex(_TOKEN_BYTES)


def is_opaque_token(value: str) -> bool:
    """True for values shaped like generate_opaque_token() output."""
    return _TOKEN_RE.fullmatch(value) is not None


def hash_code(value: str) -> str:
    """SHA-256 hex digest of a code or token."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def _store(
    account: Account,
    purpose: CodePurpose,
    plaintext: str,
    ttl: timedelta,
    now: datetime | None,
) -> str:
    hash_field, expires_field = _FIELDS[purpose]
    setattr(account, hash_field, hash_code(plaintext))
    setattr(account, expires_field, (now or _utcnow()) + ttl)
    return plaintext


def issue_numeric_code(
    account: Account, purpose: CodePurpose, *, now: datetime | None = None
) -> str:
    """Issue a 6-digit code, replacing any pending one for the same purpose.

    The caller is responsible for committing the account.
    """
    return _store(
        account, purpose, generate_numeric_code(), _NUMERIC_CODE_TTL[purpose], now
    )


def issue_opaque_token(
    account: Account, purpose: CodePurpose, *, now: datetime | None = None
) -> str:
    """Issue a 64-character hex token valid for 60 minutes."""
    return _store(account, purpose, generate_opaque_token(), RESET_TOKEN_TTL, now)


def verify_code(
    account: Account | None,
    purpose: CodePurpose,
    presented: str,
    *,
    now: datetime | None = None,
) -> bool:
    """Return True only if the account exists, the digest matches and the
    pending credential has not expired."""
    if account is None or not presented:
        return False

    hash_field, expires_field = _FIELDS[purpose]
    stored_hash: str | None = getattr(account, hash_field)
    expires_at: datetime | None = getattr(account, expires_field)
    if stored_hash is None or expires_at is None:
        return False

    if not hmac.compare_digest(stored_hash, hash_code(presented)):
        return False

    return _as_utc(expires_at) > (now or _utcnow())


def clear_code(account: Account, purpose: CodePurpose) -> None:
    hash_field, expires_field = _FIELDS[purpose]
    setattr(account, hash_field, None)
    setattr(account, expires_field, None)


def consume_code(
    account: Account | None,
    purpose: CodePurpose,
    presented: str,
    *,
    now: datetime | None = None,
) -> Account:
    """Verify and clear a pending credential in one step.

    The caller must commit the returned account together with the state
    change the credential gates.

    Raises:
        InvalidCodeError: On any verification failure.
    """
    if account is None or not verify_code(account, purpose, presented, now=now):
        raise InvalidCodeError()
    clear_code(account, purpose)
    return account

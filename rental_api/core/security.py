"""Password hashing (Argon2) and session token issuance/verification (JWT).

Session tokens carry the account id as their only identifying claim and
are signed with the process-wide JWT secret from Settings.
"""

import uuid
from datetime import UTC, datetime

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from rental_api.auth.exceptions import InvalidTokenError
from rental_api.core.settings import Settings

JWT_ALGORITHM = "HS256"

_password_hasher = PasswordHasher()


# ── Passwords ───────────────────────────────────────────────────────
def hash_password(password: str) -> str:
    """Hash a password using Argon2 (salted, one-way)."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify password against stored hash."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


# ── Session tokens ──────────────────────────────────────────────────
def create_session_token(
    account_id: uuid.UUID, settings: Settings, *, now: datetime | None = None
) -> str:
    """Mint a signed bearer token for an already-authenticated account.

    Performs no credential check itself; callers must have verified the
    account before calling.
    """
    issued_at = now or datetime.now(UTC)
    payload = {
        "sub": str(account_id),
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + settings.jwt_expires_in).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=JWT_ALGORITHM)


def decode_session_token(token: str, settings: Settings) -> uuid.UUID:
    """Verify signature and expiry, returning the embedded account id.

    Raises:
        InvalidTokenError: For any failure (bad signature, expired,
            malformed, missing subject). Causes are not distinguished.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
        return uuid.UUID(str(payload["sub"]))
    except (jwt.InvalidTokenError, ValueError) as e:
        raise InvalidTokenError() from e

"""Auth domain exceptions.

Authentication and authorization related exceptions.
"""

from typing import Any

from rental_api.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
)


# Authentication errors (401)
class InvalidCredentialsError(AuthenticationError):
    """Raised when email/password combination is invalid."""

    error_type = "invalid_credentials"

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token is missing, invalid or expired.

    Every rejection cause maps to this one error so callers cannot tell
    them apart.
    """

    error_type = "invalid_token"

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


# Authorization errors (403)
class EmailNotVerifiedError(AuthorizationError):
    """Raised on login when the email address is not verified yet."""

    error_type = "email_not_verified"

    def __init__(self, message: str = "Please verify your email before logging in"):
        super().__init__(message)

    def extra_content(self) -> dict[str, Any]:
        return {"needs_verification": True}


class AdminRequiredError(AuthorizationError):
    """Raised when admin privileges are required."""

    error_type = "admin_required"

    def __init__(self, message: str = "Admin access required"):
        super().__init__(message)


# Validation errors (400) - auth specific
class InvalidCodeError(BadRequestError):
    """Raised when a one-time code or token does not verify.

    Wrong, expired, consumed and unknown-account cases all share this error.
    """

    error_type = "invalid_code"

    def __init__(self, message: str = "Invalid or expired code"):
        super().__init__(message)


class EmailAlreadyVerifiedError(BadRequestError):
    """Raised when requesting a verification code for a verified account."""

    error_type = "email_already_verified"

    def __init__(self, message: str = "Email is already verified"):
        super().__init__(message)

"""Auth domain schemas.

Request bodies are validated here, separately from the table models, so
each endpoint owns its input rules.
"""

import uuid

from pydantic import BaseModel, EmailStr, Field, model_validator

from rental_api.account.schemas import AccountRead

MIN_PASSWORD_LENGTH = 6
CODE_PATTERN = r"^\d{6}$"
TOKEN_PATTERN = r"^[0-9a-f]{64}$"


class RegisterRequest(BaseModel):
    """Request schema for user registration."""

    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)


class LoginRequest(BaseModel):
    """Request schema for email/password login."""

    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=128)


class VerifyEmailRequest(BaseModel):
    email: EmailStr
    code: str = Field(pattern=CODE_PATTERN)


class EmailRequest(BaseModel):
    """Request schema carrying only an email (resend / forgot password)."""

    email: EmailStr


class VerifyResetCodeRequest(BaseModel):
    email: EmailStr
    code: str = Field(pattern=CODE_PATTERN)


class ResetPasswordRequest(BaseModel):
    """Request schema for resetting a password.

    Accepts either an opaque reset token (link flow, or the token returned
    by /auth/verify-reset-code) or an email + 6-digit code pair.
    """

    token: str | None = Field(default=None, pattern=TOKEN_PATTERN)
    email: EmailStr | None = None
    code: str | None = Field(default=None, pattern=CODE_PATTERN)
    new_password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)

    @model_validator(mode="after")
    def require_token_or_code(self) -> "ResetPasswordRequest":
        if self.token is None and (self.email is None or self.code is None):
            raise ValueError("Either token or email and code are required")
        return self


class ChangePasswordRequest(BaseModel):
    """Request schema for changing password (authenticated user)."""

    current_password: str = Field(min_length=1, max_length=128)
    new_password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)


class AuthSession(BaseModel):
    """Authenticated account plus its bearer token."""

    user: AccountRead
    token: str


class PendingVerification(BaseModel):
    """Returned by registration while email verification is outstanding."""

    email: str
    user_id: uuid.UUID


class ResetToken(BaseModel):
    """Opaque reset token exchanged for a verified reset code."""

    reset_token: str

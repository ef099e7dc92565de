"""Auth domain router.

Authentication routes for registration, email verification, login, and
password management. Thin HTTP handlers that delegate to AuthService.
"""

from fastapi import APIRouter, Response, status

from rental_api.account.schemas import AccountRead
from rental_api.auth.dependencies import AuthServiceDep, CurrentAccountDep
from rental_api.auth.schemas import (
    AuthSession,
    ChangePasswordRequest,
    EmailRequest,
    LoginRequest,
    PendingVerification,
    RegisterRequest,
    ResetPasswordRequest,
    ResetToken,
    VerifyEmailRequest,
    VerifyResetCodeRequest,
)
from rental_api.auth.service import SignedIn
from rental_api.core.constants import CommonResponses, Routes
from rental_api.models.response import MessageResponse, SuccessResponse

router = APIRouter(
    prefix=Routes.AUTH.prefix,
    tags=[Routes.AUTH.tag],
    responses={**CommonResponses.BAD_REQUEST},
)

_RESET_REQUESTED = "If an account exists, a password reset email has been sent"


def _session_data(signed_in: SignedIn) -> AuthSession:
    return AuthSession(
        user=AccountRead.model_validate(signed_in.account),
        token=signed_in.token,
    )


@router.post(
    "/register",
    response_model=SuccessResponse[AuthSession | PendingVerification],
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.CONFLICT},
)
async def register(payload: RegisterRequest, auth: AuthServiceDep):
    """Register a new account.

    Returns the pending email and user id when verification is required,
    otherwise the account and a session token.
    """
    result = auth.register(payload.email, payload.password)

    if isinstance(result, SignedIn):
        return SuccessResponse(
            message="Registration successful", data=_session_data(result)
        )

    return SuccessResponse(
        message=(
            "Registration successful. "
            "Please check your email for verification code."
        ),
        data=PendingVerification(email=result.email, user_id=result.account_id),
    )


@router.post("/verify-email", response_model=SuccessResponse[AuthSession])
async def verify_email(payload: VerifyEmailRequest, auth: AuthServiceDep):
    """Verify the email address with the emailed 6-digit code."""
    signed_in = auth.verify_email(payload.email, payload.code)
    return SuccessResponse(
        message="Email verified successfully", data=_session_data(signed_in)
    )


@router.post(
    "/resend-verification",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def resend_verification(payload: EmailRequest, auth: AuthServiceDep):
    """Send a new verification code, invalidating the previous one."""
    auth.resend_verification(payload.email)
    return MessageResponse(message="Verification code sent successfully")


@router.post(
    "/login",
    response_model=SuccessResponse[AuthSession],
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)
async def login(payload: LoginRequest, auth: AuthServiceDep):
    """Login with email/password and receive a bearer token."""
    signed_in = auth.login(payload.email, payload.password)
    return SuccessResponse(data=_session_data(signed_in))


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(payload: EmailRequest, auth: AuthServiceDep):
    """Request a password reset email.

    Always returns the same success response to prevent email enumeration.
    """
    auth.forgot_password(payload.email)
    return MessageResponse(message=_RESET_REQUESTED)


@router.post("/verify-reset-code", response_model=SuccessResponse[ResetToken])
async def verify_reset_code(payload: VerifyResetCodeRequest, auth: AuthServiceDep):
    """Check a reset code and exchange it for a single-use reset token."""
    reset_token = auth.verify_reset_code(payload.email, payload.code)
    return SuccessResponse(
        message="Reset code verified", data=ResetToken(reset_token=reset_token)
    )


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(payload: ResetPasswordRequest, auth: AuthServiceDep):
    """Set a new password using a reset token or an email + code pair."""
    auth.reset_password(
        payload.new_password,
        token=payload.token,
        email=payload.email,
        code=payload.code,
    )
    return MessageResponse(message="Password has been reset successfully")


@router.post(
    "/change-password",
    response_model=MessageResponse,
    responses={**CommonResponses.UNAUTHORIZED},
)
async def change_password(
    payload: ChangePasswordRequest,
    account: CurrentAccountDep,
    auth: AuthServiceDep,
):
    """Change the current account's password after checking the old one."""
    auth.change_password(account, payload.current_password, payload.new_password)
    return MessageResponse(message="Password changed successfully")


@router.get(
    "/me",
    response_model=SuccessResponse[AccountRead],
    responses={**CommonResponses.UNAUTHORIZED},
)
async def get_me(account: CurrentAccountDep, response: Response):
    """Get the current authenticated account."""
    response.headers["Cache-Control"] = "no-store"
    return SuccessResponse(data=AccountRead.model_validate(account))

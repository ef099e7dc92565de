"""Transactional email via Resend.

Plaintext codes and tokens are rendered into the message body only; they
are never logged.
"""

import logging
from urllib.parse import urlencode

import resend

from rental_api.core.constants import JinjaCompiledEmailTemplatesEnv
from rental_api.core.exceptions import InternalError
from rental_api.core.settings import get_settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(InternalError):
    """Raised when the mail provider rejects or fails a send."""

    error_type = "email_delivery_error"

    def __init__(self, message: str = "Failed to send email"):
        super().__init__(message)


def _render_template(template_name: str, **context: object) -> str:
    """Render a pre-compiled email template.

    Templates are pre-compiled with CSS inlined and HTML minified.
    Run `python scripts/compile_emails.py` after modifying source templates.
    """
    template = JinjaCompiledEmailTemplatesEnv.get_template(template_name)
    return template.render(**context)


def init_resend() -> None:
    """Initialize Resend with API key if available."""
    settings = get_settings()
    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY not set; outbound email is disabled")
        return
    resend.api_key = settings.resend_api_key


def _send(to_email: str, subject: str, html: str, text: str) -> None:
    settings = get_settings()
    if not settings.resend_api_key:
        logger.info("Email delivery disabled, dropping %r", subject)
        return

    try:
        resend.Emails.send(
            {
                "from": settings.mail_sender,
                "to": to_email,
                "subject": subject,
                "html": html,
                "text": text,
            }
        )
    except Exception as e:
        raise EmailDeliveryError() from e
    logger.info("Sent email %r", subject)


def build_reset_url(token: str) -> str:
    settings = get_settings()
    base = settings.frontend_url.rstrip("/")
    return f"{base}/reset-password?{urlencode({'token': token})}"


def send_verification_code_email(
    to_email: str, code: str, *, expires_minutes: int
) -> None:
    """Send the 6-digit email verification code."""
    html = _render_template(
        "email-verification.html", code=code, expires_minutes=expires_minutes
    )
    text = (
        "Welcome! Please verify your email address to complete your "
        f"registration.\n\nYour verification code is:\n\n{code}\n\n"
        f"This code will expire in {expires_minutes} minutes.\n\n"
        "If you did not create an account, please ignore this email."
    )
    _send(to_email, "Verify Your Email Address", html, text)


def send_password_reset_code_email(
    to_email: str, code: str, *, expires_minutes: int
) -> None:
    """Send a 6-digit password reset code."""
    html = _render_template(
        "password-reset-code.html", code=code, expires_minutes=expires_minutes
    )
    text = (
        "You (or someone else) requested a password reset for your account."
        f"\n\nYour password reset code is:\n\n{code}\n\n"
        f"This code will expire in {expires_minutes} minutes.\n\n"
        "If you did not request this, ignore this email."
    )
    _send(to_email, "Password Reset Code", html, text)


def send_password_reset_link_email(
    to_email: str, token: str, *, expires_minutes: int
) -> None:
    """Send a password reset link carrying an opaque token."""
    reset_url = build_reset_url(token)
    html = _render_template(
        "password-reset.html", reset_url=reset_url, expires_minutes=expires_minutes
    )
    text = (
        "You (or someone else) requested a password reset for your account."
        f"\n\nReset your password here:\n\n{reset_url}\n\n"
        f"This link will expire in {expires_minutes} minutes.\n\n"
        "If you did not request this, ignore this email."
    )
    _send(to_email, "Password Reset Request", html, text)

"""Application settings using Pydantic Settings for typed configuration.

This module centralizes all configuration and provides type-safe access to settings.
Settings are loaded from environment variables with sensible defaults.
"""

from datetime import timedelta
from enum import Enum
from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ResetDelivery(str, Enum):
    """How password reset credentials are delivered.

    - code: 6-digit code typed by the user (15 minute window)
    - link: opaque token embedded in a frontend link (60 minute window)
    """

    code = "code"
    link = "link"


class Settings(BaseSettings):
    """Application-wide settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env_name: str = Field(default="development", alias="ENV_NAME")
    port: int = Field(default=5000, alias="PORT")

    # Database
    database_url: str = Field(alias="DATABASE_URL")

    # Session tokens (JWT). No default: the app refuses to start without it.
    # HS256 keys shorter than the 32-byte digest are rejected.
    jwt_secret: str = Field(alias="JWT_SECRET", min_length=32)
    jwt_expires_days: int = Field(default=7, alias="JWT_EXPIRES_DAYS", ge=1, le=90)

    # Admin panel
    session_secret_key: str = Field(alias="SESSION_SECRET_KEY")

    # CORS
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Email (Resend)
    resend_api_key: str | None = Field(default=None, alias="RESEND_API_KEY")
    app_domain: str = Field(default="resend.dev", alias="APP_DOMAIN")
    mail_from: str | None = Field(default=None, alias="MAIL_FROM")
    frontend_url: str = Field(default="http://localhost:3000", alias="FRONTEND_URL")

    # Account flows
    require_email_verification: bool = Field(
        default=True, alias="REQUIRE_EMAIL_VERIFICATION"
    )
    reset_delivery: ResetDelivery = Field(
        default=ResetDelivery.code, alias="RESET_DELIVERY"
    )

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        origins = []
        for o in self.cors_origins.split(","):
            trimmed = o.strip()
            if trimmed:
                origins.append(trimmed)
        return origins

    @computed_field
    @property
    def is_development(self) -> bool:
        """Development mode echoes stack traces in error bodies."""
        return self.env_name.lower() in {"dev", "development", "local"}

    @computed_field
    @property
    def jwt_expires_in(self) -> timedelta:
        """Get session token lifetime as timedelta."""
        return timedelta(days=self.jwt_expires_days)

    @computed_field
    @property
    def mail_sender(self) -> str:
        """Sender address for outbound email."""
        return self.mail_from or f"noreply@{self.app_domain}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

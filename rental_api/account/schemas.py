"""Account domain schemas.

Request and response schemas for account and profile operations.

Security notes:
- password_hash and pending code columns are internal-only, never exposed
- AccountRead contains only fields safe for API responses
- ProfileUpdate is restricted to prevent privilege escalation
"""

import uuid
from datetime import UTC, date, datetime

from pydantic import EmailStr, Field, field_serializer, field_validator
from sqlmodel import SQLModel

from rental_api.account.models import AccountRole


def _format_utc(value: datetime) -> str:
    # Naive datetimes come from TimestampMixin and are already UTC
    if value.tzinfo is not None:
        utc_value = value.astimezone(UTC)
    else:
        utc_value = value.replace(tzinfo=UTC)
    return utc_value.replace(microsecond=0).isoformat().replace("+00:00", "Z")


class Address(SQLModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class ContactInfo(SQLModel):
    phone: str | None = None
    alternate_phone: str | None = None
    address: Address | None = None


class NotificationPreferences(SQLModel):
    email: bool | None = None
    sms: bool | None = None
    push: bool | None = None
    booking_updates: bool | None = None
    promotions: bool | None = None


class EmergencyContact(SQLModel):
    """Emergency contact; every field must be non-empty."""

    name: str = Field(min_length=1, max_length=100)
    relationship: str = Field(min_length=1, max_length=50)
    phone: str = Field(min_length=1, max_length=30)

    @field_validator("name", "relationship", "phone", mode="before")
    @classmethod
    def strip_whitespace(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class AccountDocument(SQLModel):
    type: str
    url: str
    uploaded_at: datetime | None = None
    verified: bool = False


class AccountRead(SQLModel):
    """Response schema for account data.

    This class should ONLY contain fields that are safe to expose.
    Never add password_hash or *_code_* columns here.
    """

    id: uuid.UUID
    email: EmailStr
    email_verified: bool
    role: AccountRole
    username: str | None = None
    date_of_birth: date | None = None
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    emergency_contacts: list[EmergencyContact] = Field(default_factory=list)
    notification_preferences: NotificationPreferences = Field(
        default_factory=NotificationPreferences
    )
    documents: list[AccountDocument] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_datetime(self, value: datetime) -> str:
        """Format datetime as ISO 8601 string in UTC with Z suffix."""
        return _format_utc(value)


class ProfileUpdate(SQLModel):
    """Schema for users updating their own profile.

    Intentionally limited: email, role and verification state cannot be
    changed here.
    """

    username: str | None = Field(default=None, min_length=2, max_length=50)
    date_of_birth: date | None = None
    contact_info: ContactInfo | None = None
    notification_preferences: NotificationPreferences | None = None

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class DeleteAccountRequest(SQLModel):
    password: str = Field(min_length=1)


class ProfileData(SQLModel):
    user: AccountRead


class EmergencyContactsData(SQLModel):
    emergency_contacts: list[EmergencyContact]

"""Account domain models.

SQLModel table definition for Account, the credential store record.
"""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import EmailStr
from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

from rental_api.core.mixins import TimestampMixin


class AccountRole(str, Enum):
    """Account role.

    - standard: regular renter
    - admin: may write to the vehicle catalog and use the back-office
    """

    standard = "standard"
    admin = "admin"


class Account(TimestampMixin, SQLModel, table=True):
    """Account database model.

    Note: password_hash and the pending code columns are internal-only
    and must never be exposed in API responses.
    """

    __tablename__: str = "accounts"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    email: EmailStr = Field(index=True, unique=True, max_length=255)
    password_hash: str = Field(max_length=255)
    role: AccountRole = Field(default=AccountRole.standard, max_length=20)
    email_verified: bool = Field(default=False)

    # Pending one-time credentials: digest + absolute expiry, never plaintext
    verification_code_hash: str | None = Field(default=None, max_length=64)
    verification_code_expires_at: datetime | None = Field(
        default=None, sa_type=DateTime(timezone=True)
    )
    reset_code_hash: str | None = Field(default=None, index=True, max_length=64)
    reset_code_expires_at: datetime | None = Field(
        default=None, sa_type=DateTime(timezone=True)
    )

    # Profile extension
    username: str | None = Field(default=None, max_length=50)
    date_of_birth: date | None = Field(default=None)
    contact_info: dict[str, Any] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )
    emergency_contacts: list[dict[str, str]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    notification_preferences: dict[str, bool] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )
    documents: list[dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.admin

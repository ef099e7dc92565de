"""Shared column mixins for SQLModel tables."""

from datetime import UTC, datetime

from sqlalchemy import text
from sqlmodel import Field


def utc_now_seconds() -> datetime:
    """Current UTC time truncated to whole seconds."""
    return datetime.now(UTC).replace(microsecond=0)


class TimestampMixin:
    """Adds created_at / updated_at to accounts, vehicles and bookings.

    Values are UTC at one-second resolution. The database default covers
    rows inserted outside the ORM (migrations, SQLAdmin bulk edits), and
    updated_at is refreshed on every ORM flush that changes the row.
    """

    created_at: datetime = Field(
        default_factory=utc_now_seconds,
        index=True,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
    updated_at: datetime = Field(
        default_factory=utc_now_seconds,
        sa_column_kwargs={
            "server_default": text("CURRENT_TIMESTAMP"),
            "onupdate": utc_now_seconds,
        },
    )

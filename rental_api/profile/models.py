"""Profile domain models.

Booking records are read-only here: the profile exposes an account's
rental history.
"""

import uuid
from datetime import date
from enum import Enum

from sqlmodel import Field, SQLModel

from rental_api.core.mixins import TimestampMixin


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    active = "active"
    completed = "completed"
    cancelled = "cancelled"


class Booking(TimestampMixin, SQLModel, table=True):
    """Booking database model.

    Bookings belong to an account and are removed with it.
    """

    __tablename__: str = "bookings"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    account_id: uuid.UUID = Field(
        foreign_key="accounts.id", index=True, ondelete="CASCADE"
    )
    vehicle_id: uuid.UUID | None = Field(
        default=None, foreign_key="vehicles.id", ondelete="SET NULL"
    )
    start_date: date
    end_date: date
    total_price: float = Field(ge=0)
    status: BookingStatus = Field(default=BookingStatus.pending)

"""Profile domain schemas."""

import uuid
from datetime import date, datetime

from sqlmodel import SQLModel

from rental_api.profile.models import BookingStatus


class BookingRead(SQLModel):
    id: uuid.UUID
    vehicle_id: uuid.UUID | None
    start_date: date
    end_date: date
    total_price: float
    status: BookingStatus
    created_at: datetime


class BookingsData(SQLModel):
    bookings: list[BookingRead]

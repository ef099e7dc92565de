"""Vehicle domain models.

SQLModel table definition for the rental catalog.
"""

import uuid
from enum import Enum
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from rental_api.core.mixins import TimestampMixin


class VehicleType(str, Enum):
    sedan = "sedan"
    suv = "suv"
    hatchback = "hatchback"
    truck = "truck"
    van = "van"
    sports = "sports"
    electric = "electric"


class FuelType(str, Enum):
    petrol = "petrol"
    diesel = "diesel"
    electric = "electric"
    hybrid = "hybrid"


class Transmission(str, Enum):
    manual = "manual"
    automatic = "automatic"


class Vehicle(TimestampMixin, SQLModel, table=True):
    """Vehicle database model."""

    __tablename__: str = "vehicles"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=120)
    brand: str = Field(max_length=80)
    model: str = Field(max_length=80)
    year: int
    type: VehicleType = Field(index=True)
    fuel_type: FuelType = Field(index=True)
    transmission: Transmission = Field(index=True)
    seats: int
    price_per_day: float = Field(index=True)
    images: list[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    features: list[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    specifications: dict[str, Any] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )
    is_available: bool = Field(default=True, index=True)
    location: str = Field(max_length=120)
    rating: float = Field(default=0, ge=0, le=5)
    total_reviews: int = Field(default=0, ge=0)
    description: str

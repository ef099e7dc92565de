"""Vehicle domain schemas.

Request, query and response schemas for the vehicle catalog.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import Field, field_validator, model_validator
from sqlmodel import SQLModel

from rental_api.vehicle.models import FuelType, Transmission, VehicleType


class VehicleSortField(str, Enum):
    """Columns the catalog may be sorted by."""

    created_at = "created_at"
    price_per_day = "price_per_day"
    year = "year"
    rating = "rating"
    name = "name"
    seats = "seats"


class VehicleSpecifications(SQLModel):
    engine: str | None = None
    power: str | None = None
    mileage: str | None = None
    color: str | None = None


class VehicleCreate(SQLModel):
    """Request schema for adding a vehicle to the catalog."""

    name: str = Field(min_length=1, max_length=120)
    brand: str = Field(min_length=1, max_length=80)
    model: str = Field(min_length=1, max_length=80)
    year: int = Field(ge=1900, le=2100)
    type: VehicleType
    fuel_type: FuelType
    transmission: Transmission
    seats: int = Field(ge=1, le=60)
    price_per_day: float = Field(ge=0)
    images: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    specifications: VehicleSpecifications = Field(
        default_factory=VehicleSpecifications
    )
    is_available: bool = True
    location: str = Field(min_length=1, max_length=120)
    rating: float = Field(default=0, ge=0, le=5)
    total_reviews: int = Field(default=0, ge=0)
    description: str = Field(min_length=1)

    @field_validator(
        "name", "brand", "model", "location", "description", mode="before"
    )
    @classmethod
    def strip_whitespace(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class VehicleRead(SQLModel):
    id: uuid.UUID
    name: str
    brand: str
    model: str
    year: int
    type: VehicleType
    fuel_type: FuelType
    transmission: Transmission
    seats: int
    price_per_day: float
    images: list[str]
    features: list[str]
    specifications: VehicleSpecifications
    is_available: bool
    location: str
    rating: float
    total_reviews: int
    description: str
    created_at: datetime
    updated_at: datetime


class VehicleListQuery(SQLModel):
    """Query parameters accepted by the catalog listing."""

    search: str | None = Field(default=None, max_length=100)
    type: VehicleType | None = None
    fuel_type: FuelType | None = None
    transmission: Transmission | None = None
    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    seats: int | None = Field(default=None, ge=1)
    available: bool | None = None
    location: str | None = Field(default=None, max_length=120)
    sort_by: VehicleSortField = VehicleSortField.created_at
    order: Literal["asc", "desc"] = "desc"
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)

    @model_validator(mode="after")
    def check_price_range(self) -> "VehicleListQuery":
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError("min_price must not exceed max_price")
        return self


class Pagination(SQLModel):
    total: int
    page: int
    limit: int
    pages: int


class VehicleList(SQLModel):
    vehicles: list[VehicleRead]
    pagination: Pagination


class VehicleData(SQLModel):
    vehicle: VehicleRead


class PriceRange(SQLModel):
    min_price: float = 0
    max_price: float = 100000


class FilterOptions(SQLModel):
    types: list[VehicleType]
    fuel_types: list[FuelType]
    transmissions: list[Transmission]
    seats: list[int]
    locations: list[str]
    price_range: PriceRange

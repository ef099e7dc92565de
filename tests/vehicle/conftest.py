import pytest
from sqlmodel import Session

from rental_api.vehicle.models import FuelType, Transmission, Vehicle, VehicleType


def build_vehicle(**overrides) -> Vehicle:
    fields = {
        "name": "Civic Sport",
        "brand": "Honda",
        "model": "Civic",
        "year": 2022,
        "type": VehicleType.sedan,
        "fuel_type": FuelType.petrol,
        "transmission": Transmission.automatic,
        "seats": 5,
        "price_per_day": 45.0,
        "location": "Lisbon Airport",
        "description": "Compact and frugal city car.",
    }
    fields.update(overrides)
    return Vehicle(**fields)


@pytest.fixture(name="fleet")
def fleet_fixture(session: Session) -> dict[str, Vehicle]:
    """A small catalog covering each filter dimension."""
    vehicles = {
        "civic": build_vehicle(rating=4.2),
        "model3": build_vehicle(
            name="Model 3 Long Range",
            brand="Tesla",
            model="Model 3",
            year=2023,
            type=VehicleType.electric,
            fuel_type=FuelType.electric,
            price_per_day=120.0,
            location="Porto Downtown",
            description="Electric sedan with autopilot.",
            rating=4.8,
        ),
        "transit": build_vehicle(
            name="Transit 100% Cargo",
            brand="Ford",
            model="Transit",
            year=2019,
            type=VehicleType.van,
            fuel_type=FuelType.diesel,
            transmission=Transmission.manual,
            seats=9,
            price_per_day=80.0,
            location="Lisbon Centre",
            description="Nine seats, big boot.",
            is_available=False,
            rating=3.9,
        ),
        "rav4": build_vehicle(
            name="RAV4 Hybrid",
            brand="Toyota",
            model="RAV4",
            year=2021,
            type=VehicleType.suv,
            fuel_type=FuelType.hybrid,
            price_per_day=95.5,
            location="Faro",
            description="Family SUV for_long trips.",
            rating=4.5,
        ),
    }
    session.add_all(vehicles.values())
    session.commit()
    for vehicle in vehicles.values():
        session.refresh(vehicle)
    return vehicles

"""Catalog query building.

Turns validated listing parameters into SQLAlchemy where clauses and an
ORDER BY, kept free of I/O so it can be tested without a database.
"""

from sqlalchemy import ColumnElement, or_
from sqlmodel import col

from rental_api.vehicle.models import Vehicle
from rental_api.vehicle.schemas import VehicleListQuery, VehicleSortField

_SEARCH_COLUMNS = (Vehicle.name, Vehicle.brand, Vehicle.model, Vehicle.description)

_SORT_COLUMNS = {
    VehicleSortField.created_at: Vehicle.created_at,
    VehicleSortField.price_per_day: Vehicle.price_per_day,
    VehicleSortField.year: Vehicle.year,
    VehicleSortField.rating: Vehicle.rating,
    VehicleSortField.name: Vehicle.name,
    VehicleSortField.seats: Vehicle.seats,
}


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_vehicle_filters(query: VehicleListQuery) -> list[ColumnElement[bool]]:
    """Build the where clauses for a catalog listing.

    Unset parameters add no clause. Text search is a case-insensitive
    substring match across name, brand, model and description.
    """
    clauses: list[ColumnElement[bool]] = []

    search = (query.search or "").strip()
    if search:
        pattern = _like_pattern(search)
        clauses.append(
            or_(*(col(c).ilike(pattern, escape="\\") for c in _SEARCH_COLUMNS))
        )

    if query.type is not None:
        clauses.append(col(Vehicle.type) == query.type)
    if query.fuel_type is not None:
        clauses.append(col(Vehicle.fuel_type) == query.fuel_type)
    if query.transmission is not None:
        clauses.append(col(Vehicle.transmission) == query.transmission)
    if query.min_price is not None:
        clauses.append(col(Vehicle.price_per_day) >= query.min_price)
    if query.max_price is not None:
        clauses.append(col(Vehicle.price_per_day) <= query.max_price)
    if query.seats is not None:
        clauses.append(col(Vehicle.seats) == query.seats)
    if query.available is not None:
        clauses.append(col(Vehicle.is_available) == query.available)

    location = (query.location or "").strip()
    if location:
        clauses.append(
            col(Vehicle.location).ilike(_like_pattern(location), escape="\\")
        )

    return clauses


def resolve_sort(
    sort_by: VehicleSortField, order: str
) -> tuple[ColumnElement, ColumnElement]:
    """Return the ORDER BY for a listing, with id as a stable tie-breaker."""
    column = col(_SORT_COLUMNS[sort_by])
    primary = column.asc() if order == "asc" else column.desc()
    return primary, col(Vehicle.id).asc()

"""Vehicle domain router.

Public catalog browsing plus an admin-only endpoint for adding vehicles.
"""

import math
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlmodel import col, select

from rental_api.auth.dependencies import require_admin
from rental_api.core.constants import CommonResponses, Routes
from rental_api.core.deps import SessionDep
from rental_api.models.response import SuccessResponse
from rental_api.vehicle.exceptions import VehicleNotFoundError
from rental_api.vehicle.filters import build_vehicle_filters, resolve_sort
from rental_api.vehicle.models import Vehicle
from rental_api.vehicle.schemas import (
    FilterOptions,
    Pagination,
    PriceRange,
    VehicleCreate,
    VehicleData,
    VehicleList,
    VehicleListQuery,
    VehicleRead,
)

router = APIRouter(
    prefix=Routes.VEHICLE.prefix,
    tags=[Routes.VEHICLE.tag],
    responses={**CommonResponses.BAD_REQUEST},
)


@router.get("", response_model=SuccessResponse[VehicleList])
async def list_vehicles(
    query: Annotated[VehicleListQuery, Query()],
    session: SessionDep,
):
    """Search, filter, sort and paginate the catalog."""
    clauses = build_vehicle_filters(query)

    total = session.exec(
        select(func.count()).select_from(Vehicle).where(*clauses)
    ).one()
    vehicles = session.exec(
        select(Vehicle)
        .where(*clauses)
        .order_by(*resolve_sort(query.sort_by, query.order))
        .offset((query.page - 1) * query.limit)
        .limit(query.limit)
    ).all()

    return SuccessResponse(
        data=VehicleList(
            vehicles=[VehicleRead.model_validate(v) for v in vehicles],
            pagination=Pagination(
                total=total,
                page=query.page,
                limit=query.limit,
                pages=math.ceil(total / query.limit),
            ),
        )
    )


# Declared before /{vehicle_id} so "filters" is not parsed as an id
@router.get("/filters/options", response_model=SuccessResponse[FilterOptions])
async def get_filter_options(session: SessionDep):
    """Distinct values and the price range for building filter UIs."""

    def distinct(column):
        return list(
            session.exec(select(column).distinct().order_by(column)).all()
        )

    min_price, max_price = session.exec(
        select(func.min(Vehicle.price_per_day), func.max(Vehicle.price_per_day))
    ).one()
    price_range = (
        PriceRange()
        if min_price is None
        else PriceRange(min_price=min_price, max_price=max_price)
    )

    return SuccessResponse(
        data=FilterOptions(
            types=distinct(col(Vehicle.type)),
            fuel_types=distinct(col(Vehicle.fuel_type)),
            transmissions=distinct(col(Vehicle.transmission)),
            seats=distinct(col(Vehicle.seats)),
            locations=distinct(col(Vehicle.location)),
            price_range=price_range,
        )
    )


@router.get(
    "/{vehicle_id}",
    response_model=SuccessResponse[VehicleData],
    responses={**CommonResponses.NOT_FOUND},
)
async def get_vehicle(vehicle_id: uuid.UUID, session: SessionDep):
    vehicle = session.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise VehicleNotFoundError()
    return SuccessResponse(
        data=VehicleData(vehicle=VehicleRead.model_validate(vehicle))
    )


@router.post(
    "",
    response_model=SuccessResponse[VehicleData],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)
async def create_vehicle(payload: VehicleCreate, session: SessionDep):
    """Add a vehicle to the catalog (admin only)."""
    vehicle = Vehicle.model_validate(payload.model_dump())
    session.add(vehicle)
    session.commit()
    session.refresh(vehicle)
    return SuccessResponse(
        message="Vehicle created successfully",
        data=VehicleData(vehicle=VehicleRead.model_validate(vehicle)),
    )

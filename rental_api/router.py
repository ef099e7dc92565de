"""Central API router aggregating all domain routers."""

from fastapi import APIRouter

from rental_api.auth.router import router as auth_router
from rental_api.health.router import router as health_router
from rental_api.profile.router import router as profile_router
from rental_api.vehicle.router import router as vehicle_router

api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(vehicle_router)

"""Health domain router.

Liveness plus a database round trip, for load balancers and uptime checks.
"""

import logging
from typing import Literal

from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from rental_api.core.constants import Routes
from rental_api.core.deps import SessionDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix=Routes.HEALTH.prefix, tags=[Routes.HEALTH.tag])


class HealthStatus(BaseModel):
    status: Literal["ok", "unhealthy"]
    database: Literal["ok", "error"]


def database_reachable(session: Session) -> bool:
    try:
        session.exec(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check database query failed")
        return False
    return True


@router.get(
    "",
    response_model=HealthStatus,
    responses={503: {"model": HealthStatus, "description": "Database unreachable"}},
)
async def health(session: SessionDep, response: Response):
    """Report service health; 503 when the database cannot be queried."""
    if database_reachable(session):
        return HealthStatus(status="ok", database="ok")

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthStatus(status="unhealthy", database="error")

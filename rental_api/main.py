import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqladmin import Admin

from rental_api.admin.auth import AdminAuth
from rental_api.admin.views import AccountAdmin, BookingAdmin, VehicleAdmin
from rental_api.core.cors import add_cors_middleware
from rental_api.core.email import init_resend
from rental_api.core.exception_handlers import register_exception_handlers
from rental_api.core.logging import configure_logging
from rental_api.core.request_logging import add_request_logging_middleware
from rental_api.core.settings import get_settings
from rental_api.db.engine import engine
from rental_api.router import api_router

configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Fails fast on missing JWT_SECRET / DATABASE_URL
    settings = get_settings()
    init_resend()
    logger.info(
        "Starting rental API (env=%s, reset_delivery=%s)",
        settings.env_name,
        settings.reset_delivery.value,
    )
    yield


app = FastAPI(title="Rental API", version="0.1.0", lifespan=lifespan)

app.include_router(api_router)

add_request_logging_middleware(app)
add_cors_middleware(app)
register_exception_handlers(app)

# Mount SQLAdmin UI at /admin (SQLAdmin enables sessions via auth backend secret)
admin = Admin(
    app=app,
    engine=engine,
    authentication_backend=AdminAuth(),
)
admin.add_view(AccountAdmin)
admin.add_view(VehicleAdmin)
admin.add_view(BookingAdmin)

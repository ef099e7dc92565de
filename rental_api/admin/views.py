from typing import Any

from sqladmin import ModelView
from starlette.requests import Request

from rental_api.account import store
from rental_api.account.models import Account
from rental_api.profile.models import Booking
from rental_api.vehicle.models import Vehicle


class AccountAdmin(ModelView, model=Account):
    name = "Account"
    name_plural = "Accounts"
    icon = "fa-solid fa-user"

    column_list = [
        Account.email,
        Account.username,
        Account.role,
        Account.email_verified,
        Account.id,
        Account.created_at,
        Account.updated_at,
    ]
    column_searchable_list = [Account.email, Account.username]
    column_sortable_list = [
        Account.email,
        Account.role,
        Account.email_verified,
        Account.created_at,
    ]

    # Credentials and pending one-time codes never leave the database
    column_details_exclude_list = [
        Account.password_hash,
        Account.verification_code_hash,
        Account.verification_code_expires_at,
        Account.reset_code_hash,
        Account.reset_code_expires_at,
    ]
    form_excluded_columns = column_details_exclude_list
    can_create = False
    can_export = False

    async def on_model_change(
        self, data: dict[str, Any], model: Any, is_created: bool, request: Request
    ) -> None:
        # Lookups and the unique index assume lowercase, trimmed emails
        if isinstance(data.get("email"), str):
            data["email"] = store.normalize_email(data["email"])


class VehicleAdmin(ModelView, model=Vehicle):
    name = "Vehicle"
    name_plural = "Vehicles"
    icon = "fa-solid fa-car"

    column_list = [
        Vehicle.name,
        Vehicle.brand,
        Vehicle.model,
        Vehicle.year,
        Vehicle.type,
        Vehicle.price_per_day,
        Vehicle.location,
        Vehicle.is_available,
        Vehicle.rating,
    ]
    column_searchable_list = [
        Vehicle.name,
        Vehicle.brand,
        Vehicle.model,
        Vehicle.location,
    ]
    column_sortable_list = [
        Vehicle.name,
        Vehicle.year,
        Vehicle.price_per_day,
        Vehicle.rating,
        Vehicle.created_at,
    ]


class BookingAdmin(ModelView, model=Booking):
    name = "Booking"
    name_plural = "Bookings"
    icon = "fa-solid fa-calendar"

    column_list = [
        Booking.id,
        Booking.account_id,
        Booking.vehicle_id,
        Booking.start_date,
        Booking.end_date,
        Booking.total_price,
        Booking.status,
        Booking.created_at,
    ]
    column_sortable_list = [
        Booking.start_date,
        Booking.total_price,
        Booking.status,
        Booking.created_at,
    ]
    column_default_sort = [(Booking.created_at, True)]

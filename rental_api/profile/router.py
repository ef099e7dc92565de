"""Profile domain router.

Endpoints for the authenticated account's own profile: details, booking
history, emergency contacts and account deletion.
"""

from fastapi import APIRouter, Depends
from sqlmodel import col, select

from rental_api.account import store
from rental_api.account.exceptions import EmergencyContactNotFoundError
from rental_api.account.models import Account
from rental_api.account.schemas import (
    AccountRead,
    DeleteAccountRequest,
    EmergencyContact,
    EmergencyContactsData,
    ProfileData,
    ProfileUpdate,
)
from rental_api.auth.dependencies import (
    AuthServiceDep,
    CurrentAccountDep,
    require_auth,
)
from rental_api.core.constants import CommonResponses, Routes
from rental_api.core.deps import SessionDep
from rental_api.models.response import MessageResponse, SuccessResponse
from rental_api.profile.models import Booking
from rental_api.profile.schemas import BookingRead, BookingsData

router = APIRouter(
    prefix=Routes.PROFILE.prefix,
    tags=[Routes.PROFILE.tag],
    dependencies=[Depends(require_auth)],
    responses={**CommonResponses.UNAUTHORIZED},
)


def _profile(account: Account) -> ProfileData:
    return ProfileData(user=AccountRead.model_validate(account))


@router.get("", response_model=SuccessResponse[ProfileData])
async def get_profile(account: CurrentAccountDep):
    """Get the current account's profile."""
    return SuccessResponse(data=_profile(account))


@router.put(
    "",
    response_model=SuccessResponse[ProfileData],
    responses={**CommonResponses.BAD_REQUEST},
)
async def update_profile(
    payload: ProfileUpdate,
    account: CurrentAccountDep,
    session: SessionDep,
):
    """Update the current account's profile.

    Only provided fields are changed. contact_info and
    notification_preferences are merged key by key into the stored values.
    """
    if "username" in payload.model_fields_set:
        account.username = payload.username
    if "date_of_birth" in payload.model_fields_set:
        account.date_of_birth = payload.date_of_birth
    if payload.contact_info is not None:
        # Assign a new dict so the JSON column is flagged dirty
        account.contact_info = {
            **account.contact_info,
            **payload.contact_info.model_dump(mode="json", exclude_unset=True),
        }
    if payload.notification_preferences is not None:
        account.notification_preferences = {
            **account.notification_preferences,
            **payload.notification_preferences.model_dump(exclude_unset=True),
        }

    store.save_account(session, account)
    return SuccessResponse(
        message="Profile updated successfully", data=_profile(account)
    )


@router.delete(
    "",
    response_model=MessageResponse,
    responses={**CommonResponses.BAD_REQUEST},
)
async def delete_profile(
    payload: DeleteAccountRequest,
    account: CurrentAccountDep,
    auth: AuthServiceDep,
):
    """Delete the current account. Requires the current password."""
    auth.delete_account(account, payload.password)
    return MessageResponse(message="Account deleted successfully")


@router.get("/bookings", response_model=SuccessResponse[BookingsData])
async def list_bookings(account: CurrentAccountDep, session: SessionDep):
    """List the current account's bookings, newest first."""
    bookings = session.exec(
        select(Booking)
        .where(Booking.account_id == account.id)
        .order_by(col(Booking.created_at).desc(), col(Booking.id))
    ).all()
    return SuccessResponse(
        data=BookingsData(
            bookings=[BookingRead.model_validate(b) for b in bookings]
        )
    )


@router.get(
    "/emergency-contacts", response_model=SuccessResponse[EmergencyContactsData]
)
async def list_emergency_contacts(account: CurrentAccountDep):
    return SuccessResponse(
        data=EmergencyContactsData(emergency_contacts=account.emergency_contacts)
    )


@router.post(
    "/emergency-contacts",
    response_model=SuccessResponse[EmergencyContactsData],
    responses={**CommonResponses.BAD_REQUEST},
)
async def add_emergency_contact(
    contact: EmergencyContact,
    account: CurrentAccountDep,
    session: SessionDep,
):
    """Append an emergency contact to the end of the list."""
    account.emergency_contacts = [*account.emergency_contacts, contact.model_dump()]
    store.save_account(session, account)
    return SuccessResponse(
        message="Emergency contact added successfully",
        data=EmergencyContactsData(emergency_contacts=account.emergency_contacts),
    )


@router.delete(
    "/emergency-contacts/{index}",
    response_model=SuccessResponse[EmergencyContactsData],
    responses={**CommonResponses.NOT_FOUND},
)
async def remove_emergency_contact(
    account: CurrentAccountDep,
    session: SessionDep,
    index: int,
):
    """Remove the emergency contact at the given position."""
    contacts = list(account.emergency_contacts)
    if index < 0 or index >= len(contacts):
        raise EmergencyContactNotFoundError()

    del contacts[index]
    account.emergency_contacts = contacts
    store.save_account(session, account)
    return SuccessResponse(
        message="Emergency contact removed successfully",
        data=EmergencyContactsData(emergency_contacts=account.emergency_contacts),
    )

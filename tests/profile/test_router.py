"""Tests for profile domain router."""

from datetime import date, datetime

from fastapi.testclient import TestClient
from sqlmodel import Session

from rental_api.account import store
from rental_api.profile.models import Booking, BookingStatus

CONTACT = {"name": "Jane Doe", "relationship": "Sister", "phone": "+15550100"}


def test_get_profile(client: TestClient, test_account, auth_headers):
    response = client.get("/profile", headers=auth_headers(test_account))

    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["email"] == test_account.email
    assert user["username"] == "Renter"
    assert "password_hash" not in user
    assert "reset_code_hash" not in user


def test_profile_requires_auth(client: TestClient):
    assert client.get("/profile").status_code == 401
    assert client.get("/profile/bookings").status_code == 401
    assert client.get(
        "/profile", headers={"Authorization": "Token abc"}
    ).status_code == 401


def test_update_profile_merges_nested_fields(
    client: TestClient, session: Session, test_account, auth_headers
):
    test_account.contact_info = {"phone": "111", "alternate_phone": "222"}
    test_account.notification_preferences = {"email": True, "sms": True}
    store.save_account(session, test_account)

    response = client.put(
        "/profile",
        json={
            "username": "  Road Tripper ",
            "date_of_birth": "1990-04-12",
            "contact_info": {"phone": "333"},
            "notification_preferences": {"sms": False},
        },
        headers=auth_headers(test_account),
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Profile updated successfully"
    user = response.json()["data"]["user"]
    assert user["username"] == "Road Tripper"
    assert user["date_of_birth"] == "1990-04-12"
    assert user["contact_info"]["phone"] == "333"
    assert user["contact_info"]["alternate_phone"] == "222"
    assert user["notification_preferences"]["email"] is True
    assert user["notification_preferences"]["sms"] is False


def test_update_profile_rejects_short_username(
    client: TestClient, test_account, auth_headers
):
    response = client.put(
        "/profile", json={"username": "x"}, headers=auth_headers(test_account)
    )

    assert response.status_code == 400
    assert response.json()["error"]["errors"][0]["field"] == "username"


def test_update_profile_ignores_privileged_fields(
    client: TestClient, test_account, auth_headers
):
    response = client.put(
        "/profile",
        json={"role": "admin", "email": "hijack@example.com"},
        headers=auth_headers(test_account),
    )

    assert response.status_code == 200
    assert test_account.role == "standard"
    assert test_account.email == "renter@example.com"


def test_delete_profile_wrong_password(
    client: TestClient, session: Session, test_account, auth_headers
):
    response = client.request(
        "DELETE",
        "/profile",
        json={"password": "wrong"},
        headers=auth_headers(test_account),
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Invalid password"
    assert store.get_account_by_id(session, test_account.id) is not None


def test_delete_profile(client: TestClient, session: Session, test_account, auth_headers):
    headers = auth_headers(test_account)
    account_id = test_account.id

    response = client.request(
        "DELETE", "/profile", json={"password": "secret123"}, headers=headers
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Account deleted successfully"
    assert store.get_account_by_id(session, account_id) is None
    # The token outlives the account but no longer authenticates
    assert client.get("/profile", headers=headers).status_code == 401


def test_list_bookings_newest_first(
    client: TestClient, session: Session, test_account, admin_account, auth_headers
):
    for day, status in ((1, BookingStatus.completed), (2, BookingStatus.confirmed)):
        session.add(
            Booking(
                account_id=test_account.id,
                start_date=date(2026, 6, day),
                end_date=date(2026, 6, day + 3),
                total_price=99.5 * day,
                status=status,
                created_at=datetime(2026, 5, day, 9, 0),
            )
        )
    # Someone else's booking stays private
    session.add(
        Booking(
            account_id=admin_account.id,
            start_date=date(2026, 6, 1),
            end_date=date(2026, 6, 2),
            total_price=10,
        )
    )
    session.commit()

    response = client.get("/profile/bookings", headers=auth_headers(test_account))

    assert response.status_code == 200
    bookings = response.json()["data"]["bookings"]
    assert [b["status"] for b in bookings] == ["confirmed", "completed"]
    assert bookings[0]["start_date"] == "2026-06-02"


def test_emergency_contacts_lifecycle(client: TestClient, test_account, auth_headers):
    headers = auth_headers(test_account)

    empty = client.get("/profile/emergency-contacts", headers=headers)
    assert empty.json()["data"]["emergency_contacts"] == []

    added = client.post("/profile/emergency-contacts", json=CONTACT, headers=headers)
    assert added.status_code == 200
    assert added.json()["message"] == "Emergency contact added successfully"

    second = {**CONTACT, "name": "John Doe"}
    client.post("/profile/emergency-contacts", json=second, headers=headers)
    listed = client.get("/profile/emergency-contacts", headers=headers)
    names = [c["name"] for c in listed.json()["data"]["emergency_contacts"]]
    assert names == ["Jane Doe", "John Doe"]

    removed = client.delete("/profile/emergency-contacts/0", headers=headers)
    assert removed.status_code == 200
    assert removed.json()["data"]["emergency_contacts"] == [second]


def test_emergency_contact_fields_must_be_non_empty(
    client: TestClient, test_account, auth_headers
):
    response = client.post(
        "/profile/emergency-contacts",
        json={**CONTACT, "relationship": "   "},
        headers=auth_headers(test_account),
    )

    assert response.status_code == 400
    assert test_account.emergency_contacts == []


def test_remove_emergency_contact_out_of_range(
    client: TestClient, test_account, auth_headers
):
    headers = auth_headers(test_account)
    client.post("/profile/emergency-contacts", json=CONTACT, headers=headers)

    for index in (1, -1):
        response = client.delete(f"/profile/emergency-contacts/{index}", headers=headers)
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Emergency contact not found"

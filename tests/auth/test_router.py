"""Tests for auth domain router."""

from fastapi.testclient import TestClient

from rental_api.account import store
from rental_api.core.settings import ResetDelivery, Settings

# --- POST /auth/register ---


def test_register_pending_verification(client: TestClient, outbox):
    response = client.post(
        "/auth/register",
        json={"email": "new@example.com", "password": "secret123"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == (
        "Registration successful. Please check your email for verification code."
    )
    assert body["data"]["email"] == "new@example.com"
    assert "user_id" in body["data"]
    assert outbox.last("verify").to == "new@example.com"


def test_register_without_verification_returns_session(
    client: TestClient, settings: Settings
):
    settings.require_email_verification = False

    response = client.post(
        "/auth/register",
        json={"email": "new@example.com", "password": "secret123"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["token"]
    assert data["user"]["email"] == "new@example.com"
    assert "password" not in response.text
    assert "password_hash" not in data["user"]


def test_register_duplicate_email(client: TestClient, test_account):
    response = client.post(
        "/auth/register",
        json={"email": test_account.email, "password": "secret123"},
    )

    assert response.status_code == 409
    assert response.json() == {
        "success": False,
        "error": {
            "type": "email_exists",
            "message": "User with this email already exists",
            "status_code": 409,
        },
    }


def test_register_validation_errors(client: TestClient):
    response = client.post(
        "/auth/register", json={"email": "not-an-email", "password": "123"}
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["type"] == "validation_error"
    fields = {e["field"] for e in error["errors"]}
    assert fields == {"email", "password"}


# --- POST /auth/verify-email, /auth/resend-verification ---


def test_verify_email_flow(client: TestClient, outbox):
    client.post(
        "/auth/register", json={"email": "v@example.com", "password": "secret123"}
    )
    code = outbox.last("verify").secret

    payload = {"email": "v@example.com", "code": code}
    response = client.post("/auth/verify-email", json=payload)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["email_verified"] is True
    assert data["token"]

    replay = client.post("/auth/verify-email", json=payload)
    assert replay.status_code == 400


def test_verify_email_no_enumeration(client: TestClient, outbox):
    client.post(
        "/auth/register", json={"email": "v@example.com", "password": "secret123"}
    )

    unknown = client.post(
        "/auth/verify-email", json={"email": "ghost@example.com", "code": "123456"}
    )
    wrong = client.post(
        "/auth/verify-email", json={"email": "v@example.com", "code": "000000"}
    )

    assert unknown.status_code == wrong.status_code == 400
    assert unknown.json() == wrong.json()


def test_resend_verification(client: TestClient, unverified_account, outbox):
    response = client.post(
        "/auth/resend-verification", json={"email": unverified_account.email}
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Verification code sent successfully"
    assert outbox.last("verify").to == unverified_account.email


def test_resend_verification_errors(client: TestClient, test_account):
    unknown = client.post(
        "/auth/resend-verification", json={"email": "ghost@example.com"}
    )
    verified = client.post(
        "/auth/resend-verification", json={"email": test_account.email}
    )

    assert unknown.status_code == 404
    assert verified.status_code == 400


# --- POST /auth/login ---


def test_login_success(client: TestClient, test_account):
    response = client.post(
        "/auth/login", json={"email": test_account.email, "password": "secret123"}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["id"] == str(test_account.id)
    assert data["token"]
    assert "password_hash" not in data["user"]


def test_login_wrong_password(client: TestClient, test_account):
    response = client.post(
        "/auth/login", json={"email": test_account.email, "password": "wrong"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid credentials"


def test_login_unverified_flags_verification(client: TestClient, unverified_account):
    response = client.post(
        "/auth/login",
        json={"email": unverified_account.email, "password": "secret123"},
    )

    assert response.status_code == 403
    body = response.json()
    assert body["needs_verification"] is True
    assert body["error"]["type"] == "email_not_verified"


# --- password reset ---


def test_forgot_password_same_response_for_any_email(
    client: TestClient, test_account, outbox
):
    known = client.post("/auth/forgot-password", json={"email": test_account.email})
    unknown = client.post("/auth/forgot-password", json={"email": "ghost@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert len(outbox.messages) == 1


def test_reset_code_scenario(client: TestClient, test_account, outbox):
    """forgot-password -> verify-reset-code -> replay fails -> reset-password."""
    client.post("/auth/forgot-password", json={"email": test_account.email})
    code = outbox.last("reset_code").secret
    assert test_account.reset_code_hash is not None

    verified = client.post(
        "/auth/verify-reset-code", json={"email": test_account.email, "code": code}
    )
    assert verified.status_code == 200
    reset_token = verified.json()["data"]["reset_token"]

    replay = client.post(
        "/auth/verify-reset-code", json={"email": test_account.email, "code": code}
    )
    assert replay.status_code == 400

    reset = client.post(
        "/auth/reset-password",
        json={"token": reset_token, "new_password": "brand-new1"},
    )
    assert reset.status_code == 200

    login = client.post(
        "/auth/login", json={"email": test_account.email, "password": "brand-new1"}
    )
    assert login.status_code == 200


def test_reset_password_with_email_and_code(client: TestClient, test_account, outbox):
    client.post("/auth/forgot-password", json={"email": test_account.email})
    code = outbox.last("reset_code").secret

    response = client.post(
        "/auth/reset-password",
        json={"email": test_account.email, "code": code, "new_password": "brand-new1"},
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Password has been reset successfully"


def test_reset_password_link_flow(
    client: TestClient, settings: Settings, test_account, outbox
):
    settings.reset_delivery = ResetDelivery.link
    client.post("/auth/forgot-password", json={"email": test_account.email})

    response = client.post(
        "/auth/reset-password",
        json={"token": outbox.last("reset_link").secret, "new_password": "brand-new1"},
    )

    assert response.status_code == 200


def test_reset_password_invalid_inputs(client: TestClient, test_account):
    missing = client.post("/auth/reset-password", json={"new_password": "brand-new1"})
    bad_token = client.post(
        "/auth/reset-password", json={"token": "f" * 64, "new_password": "brand-new1"}
    )
    weak = client.post(
        "/auth/reset-password",
        json={"email": test_account.email, "code": "123456", "new_password": "123"},
    )

    assert missing.status_code == 400
    assert bad_token.status_code == 400
    assert bad_token.json()["error"]["message"] == "Invalid or expired code"
    assert weak.status_code == 400


# --- POST /auth/change-password ---


def test_change_password(client: TestClient, test_account, auth_headers):
    response = client.post(
        "/auth/change-password",
        json={"current_password": "secret123", "new_password": "changed-1"},
        headers=auth_headers(test_account),
    )

    assert response.status_code == 200
    assert store.check_password(test_account, "changed-1")


def test_change_password_wrong_current(client: TestClient, test_account, auth_headers):
    stored = test_account.password_hash

    response = client.post(
        "/auth/change-password",
        json={"current_password": "wrong-pass", "new_password": "changed-1"},
        headers=auth_headers(test_account),
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Current password is incorrect"
    assert test_account.password_hash == stored


def test_change_password_requires_bearer(client: TestClient):
    response = client.post(
        "/auth/change-password",
        json={"current_password": "secret123", "new_password": "changed-1"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["type"] == "invalid_token"


# --- GET /auth/me ---


def test_get_me(client: TestClient, test_account, auth_headers):
    response = client.get("/auth/me", headers=auth_headers(test_account))

    assert response.status_code == 200
    assert response.json()["data"]["email"] == test_account.email
    assert response.headers["cache-control"] == "no-store"


def test_get_me_rejects_garbage_token(client: TestClient):
    response = client.get("/auth/me", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401


# --- end-to-end scenario ---


def test_register_login_profile_delete_scenario(
    client: TestClient, settings: Settings
):
    settings.require_email_verification = False

    assert (
        client.post(
            "/auth/register", json={"email": "a@x.com", "password": "secret1"}
        ).status_code
        == 201
    )
    assert (
        client.post(
            "/auth/login", json={"email": "a@x.com", "password": "wrong"}
        ).status_code
        == 401
    )

    login = client.post("/auth/login", json={"email": "a@x.com", "password": "secret1"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['data']['token']}"}

    profile = client.get("/profile", headers=headers)
    assert profile.status_code == 200
    assert profile.json()["data"]["user"]["email"] == "a@x.com"

    delete = client.request(
        "DELETE", "/profile", json={"password": "wrong"}, headers=headers
    )
    assert delete.status_code == 400
    assert client.get("/profile", headers=headers).status_code == 200

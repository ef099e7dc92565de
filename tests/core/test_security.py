"""Tests for rental_api/core/security.py - password hashing and session tokens."""

import uuid
from datetime import UTC, datetime, timedelta

import jwt
import pytest

from rental_api.auth.exceptions import InvalidTokenError
from rental_api.core.security import (
    JWT_ALGORITHM,
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)
from rental_api.core.settings import Settings


def test_hash_password_is_salted_and_one_way():
    first = hash_password("secret123")
    second = hash_password("secret123")

    assert first != "secret123"
    assert first != second
    assert verify_password("secret123", first)
    assert verify_password("secret123", second)


def test_verify_password_rejects_wrong_password():
    assert not verify_password("wrong", hash_password("secret123"))


def test_verify_password_rejects_garbage_hash():
    assert not verify_password("secret123", "not-an-argon2-hash")


def test_session_token_round_trip(settings: Settings):
    account_id = uuid.uuid4()

    token = create_session_token(account_id, settings)

    assert decode_session_token(token, settings) == account_id


def test_session_token_claims(settings: Settings):
    account_id = uuid.uuid4()
    now = datetime.now(UTC).replace(microsecond=0)

    token = create_session_token(account_id, settings, now=now)
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[JWT_ALGORITHM])

    assert payload["sub"] == str(account_id)
    assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())
    assert set(payload) == {"sub", "iat", "exp"}


def test_token_signed_with_other_secret_is_rejected(settings: Settings):
    other = settings.model_copy(
        update={"jwt_secret": "another-secret-0123456789abcdef01234"}
    )
    token = create_session_token(uuid.uuid4(), other)

    with pytest.raises(InvalidTokenError):
        decode_session_token(token, settings)


def test_expired_token_is_rejected(settings: Settings):
    issued = datetime.now(UTC) - settings.jwt_expires_in - timedelta(minutes=1)
    token = create_session_token(uuid.uuid4(), settings, now=issued)

    with pytest.raises(InvalidTokenError):
        decode_session_token(token, settings)


@pytest.mark.parametrize(
    "payload",
    [
        {"exp": 9999999999},
        {"sub": "not-a-uuid", "exp": 9999999999},
        {"sub": str(uuid.uuid4())},
    ],
)
def test_token_with_bad_claims_is_rejected(settings: Settings, payload):
    token = jwt.encode(payload, settings.jwt_secret, algorithm=JWT_ALGORITHM)

    with pytest.raises(InvalidTokenError):
        decode_session_token(token, settings)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_is_rejected(settings: Settings, token):
    with pytest.raises(InvalidTokenError):
        decode_session_token(token, settings)

"""Tests for password hashing and the registration password rules."""

import pytest

from task_manager.core.security import PASSWORD_MAX_BYTES, hash_password, verify_password
from task_manager.errors import ValidationFailed
from task_manager.schemas.user import RegisterRequest
from task_manager.validation import USER_FIELD_MESSAGES, validate_payload

pytestmark = pytest.mark.unit


def register(password):
    return validate_payload(
        RegisterRequest,
        {"username": "testuser", "email": "test@example.com", "password": password},
        USER_FIELD_MESSAGES,
    )


def test_hash_round_trip():
    hashed = hash_password("password123")

    assert hashed != "password123"
    assert verify_password("password123", hashed)
    assert not verify_password("password124", hashed)


def test_passwords_differing_after_72_bytes_are_never_hashed():
    with pytest.raises(ValueError):
        hash_password("a" * PASSWORD_MAX_BYTES + "b")


def test_over_long_login_attempt_does_not_match():
    hashed = hash_password("a" * PASSWORD_MAX_BYTES)

    assert verify_password("a" * PASSWORD_MAX_BYTES, hashed)
    assert not verify_password("a" * PASSWORD_MAX_BYTES + "b", hashed)


def test_register_accepts_password_of_exactly_72_bytes():
    assert register("a" * PASSWORD_MAX_BYTES).password == "a" * PASSWORD_MAX_BYTES


@pytest.mark.parametrize("password", ["a" * 73, "é" * 37])
def test_register_rejects_password_over_72_bytes(password):
    with pytest.raises(ValidationFailed) as exc_info:
        register(password)

    entry = exc_info.value.errors[0]
    assert entry["path"] == "password"
    assert entry["msg"] == "Password cannot exceed 72 bytes"


def test_short_password_keeps_its_own_message():
    with pytest.raises(ValidationFailed) as exc_info:
        register("123")

    assert exc_info.value.errors[0]["msg"] == "Password must be at least 6 characters long"

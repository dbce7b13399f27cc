"""Tests for sign-up, sign-in and sign-out."""

from core.auth import (
    ADMIN,
    ANONYMOUS,
    MEMBER,
    REASON_CONFLICT,
    REASON_CREDENTIALS,
    REASON_NOT_ADMIN,
    REASON_VALIDATION,
    SESSION_KEY,
)

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "change-me-now"


def test_sign_up_then_sign_in(auth):
    session = {}
    assert auth.sign_up("New@Example.com", "secret1", "secret1").ok
    result = auth.sign_in("new@example.com", "secret1", session)
    assert result.ok
    assert session[SESSION_KEY]["email"] == "new@example.com"
    assert auth.access_level(session) == MEMBER


def test_sign_up_validation_messages(auth):
    assert auth.sign_up("", "secret1").error == "Please fill in all fields"
    short = auth.sign_up("a@example.com", "abc")
    assert short.reason == REASON_VALIDATION
    assert short.error == "Password must be at least 6 characters"
    assert auth.sign_up("a@example.com", "secret1", "secret2").error == "Passwords do not match"


def test_duplicate_sign_up_is_a_conflict(auth):
    assert auth.sign_up("dup@example.com", "secret1").ok
    again = auth.sign_up("DUP@example.com", "secret1")
    assert not again.ok
    assert again.reason == REASON_CONFLICT
    assert again.error == "User already registered"


def test_wrong_password_is_rejected(auth):
    session = {}
    result = auth.sign_in(ADMIN_EMAIL, "wrong-password", session)
    assert not result.ok
    assert result.reason == REASON_CREDENTIALS
    assert result.error == "Invalid login credentials"
    assert SESSION_KEY not in session
    assert auth.access_level(session) == ANONYMOUS


def test_bootstrap_admin_is_admin(auth):
    session = {}
    assert auth.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD, session, require_admin=True).ok
    assert auth.is_admin(session)
    assert auth.access_level(session) == ADMIN


def test_require_admin_keeps_non_admin_signed_in(auth):
    session = {}
    auth.sign_up("member@example.com", "secret1")
    result = auth.sign_in("member@example.com", "secret1", session, require_admin=True)
    assert not result.ok
    assert result.reason == REASON_NOT_ADMIN
    assert auth.current_user(session)["email"] == "member@example.com"


def test_sign_out_clears_session(auth):
    session = {}
    auth.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD, session)
    assert auth.sign_out(session).ok
    assert auth.current_user(session) is None
    assert not auth.is_admin(session)

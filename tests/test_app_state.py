"""Tests for the session state: cache loading, auth flow and admin mutations."""

import pytest

from core.app_state import AppState
from core.auth import REASON_NOT_ADMIN, AuthService
from core.errors import StoreError, ValidationError
from core.models import UNKNOWN_DEPARTMENT, Upload
from core.navigation import Section

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "change-me-now"
PNG = Upload(name="photo.png", data=b"\x89PNG fake bytes")


def test_load_fills_cache_and_clears_loading(app_state):
    assert app_state.nav.loading is False
    assert app_state.load_error is None
    assert app_state.department_names() == ["Core", "Advisory"]
    assert app_state.cache.about_text == "About us."


def test_load_failure_still_clears_loading(app_state, monkeypatch):
    def broken():
        raise StoreError("Failed to load team")

    monkeypatch.setattr(app_state.store, "list_members", broken)
    app_state.load()
    assert app_state.nav.loading is False
    assert app_state.load_error == "Failed to load team"


def test_admin_redirect_then_sign_in_goes_home(app_state):
    """Requesting admin while signed out lands on auth; signing in returns home."""
    assert app_state.navigate(Section.ADMIN) is False
    assert app_state.nav.active == Section.AUTH

    result = app_state.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD, on_success=app_state.nav.on_auth_success)
    assert result.ok
    assert app_state.nav.active == Section.HOME
    assert app_state.is_admin
    assert app_state.navigate(Section.ADMIN) is True


def test_non_admin_sign_in_after_admin_redirect(app_state):
    app_state.sign_up("member@example.com", "secret1")
    app_state.navigate(Section.ADMIN)
    calls = []
    result = app_state.sign_in("member@example.com", "secret1", on_success=lambda: calls.append(1))
    assert result.reason == REASON_NOT_ADMIN
    assert calls == []
    assert app_state.user["email"] == "member@example.com"
    assert app_state.nav.active == Section.AUTH


def test_sign_out_returns_home(admin_state):
    admin_state.navigate(Section.ADMIN)
    admin_state.sign_out()
    assert admin_state.nav.active == Section.HOME
    assert admin_state.user is None
    assert not admin_state.is_admin


def test_mutations_require_admin(app_state):
    notice = app_state.save_about_text("Hijacked")
    assert not notice.ok
    assert notice.message == "Admin access required"
    assert app_state.store.get_about_text() == "About us."


def test_validation_raises_before_the_store(admin_state, monkeypatch):
    def unexpected(*args, **kwargs):
        raise AssertionError("store should not be called")

    monkeypatch.setattr(admin_state.store, "add_member", unexpected)
    with pytest.raises(ValidationError) as exc:
        admin_state.save_member("", " ", None)
    assert exc.value.errors == ["Name is required", "Role is required"]

    with pytest.raises(ValidationError, match="Title is required"):
        admin_state.save_event("", "1 Jan 2025")
    with pytest.raises(ValidationError, match="Please choose an image"):
        admin_state.add_gallery_image(None)
    with pytest.raises(ValidationError, match="Department name is required"):
        admin_state.add_department("  ")


def test_member_lifecycle_refreshes_cache(admin_state):
    assert admin_state.add_department("Technical").ok
    tech = admin_state.department_by_name("technical")
    assert tech is not None

    notice = admin_state.save_member("Gus", "Head", tech.id, image=PNG)
    assert notice.ok
    assert notice.message == "Team member added!"
    [gus] = admin_state.cache.members
    assert gus.department == "Technical"

    assert admin_state.save_member("Gus", "Vice Head", tech.id, member_id=gus.id).ok
    assert admin_state.cache.members[0].role == "Vice Head"

    roster = admin_state.roster()
    assert [g.name for g in roster.departments] == ["Technical"]

    assert admin_state.delete_member(gus.id).ok
    assert admin_state.cache.members == []


def test_deleting_department_keeps_members(admin_state):
    admin_state.add_department("Technical")
    tech = admin_state.department_by_name("Technical")
    admin_state.save_member("Gus", "Head", tech.id)

    assert admin_state.delete_department(tech.id).ok
    assert admin_state.department_names() == ["Core", "Advisory"]
    assert admin_state.cache.members[0].department == UNKNOWN_DEPARTMENT
    assert admin_state.roster().all_members() == []


def test_core_is_not_deletable(admin_state):
    assert "Core" not in [d.name for d in admin_state.deletable_departments()]


def test_failed_store_call_leaves_cache_untouched(admin_state):
    admin_state.add_department("Technical")
    before = list(admin_state.cache.departments)
    notice = admin_state.add_department("TECHNICAL")
    assert not notice.ok
    assert "already exists" in notice.message
    assert admin_state.cache.departments == before


def test_events_split_by_status(admin_state):
    assert admin_state.save_event("Fest", "1 Jan 2025", "Short", status="past").ok
    assert admin_state.save_event("Meetup", "1 Jun 2025", "Soon", status="upcoming").ok
    assert [e.title for e in admin_state.past_events()] == ["Fest"]
    assert [e.title for e in admin_state.upcoming_events()] == ["Meetup"]

    fest = admin_state.past_events()[0]
    assert admin_state.save_event(
        "Fest 2025", fest.date, fest.short_description, status="past", event_id=fest.id, existing_gallery=fest.gallery
    ).ok
    assert admin_state.past_events()[0].title == "Fest 2025"
    assert admin_state.delete_event(fest.id).ok
    assert admin_state.past_events() == []


def test_gallery_add_and_delete(admin_state):
    assert admin_state.add_gallery_image(PNG, "Stage").ok
    [img] = admin_state.cache.gallery
    assert img.alt == "Stage"
    assert admin_state.delete_gallery_image(img.id).ok
    assert admin_state.cache.gallery == []


def test_grant_and_revoke_admin(admin_state):
    admin_state.sign_up("helper@example.com", "secret1")
    assert admin_state.grant_admin("Helper@Example.com").ok
    emails = [a["email"] for a in admin_state.list_admins()]
    assert emails == ["admin@example.com", "helper@example.com"]

    again = admin_state.grant_admin("helper@example.com")
    assert not again.ok
    assert "already has the admin role" in again.message

    assert admin_state.revoke_admin("helper@example.com").ok
    assert [a["email"] for a in admin_state.list_admins()] == ["admin@example.com"]


def test_grant_admin_unknown_account(admin_state):
    notice = admin_state.grant_admin("ghost@example.com")
    assert not notice.ok
    assert "No account found" in notice.message
    with pytest.raises(ValidationError, match="Email is required"):
        admin_state.grant_admin("   ")


def test_cannot_revoke_own_admin(admin_state):
    notice = admin_state.revoke_admin(ADMIN_EMAIL)
    assert not notice.ok
    assert notice.message == "You cannot revoke your own admin access"
    assert admin_state.is_admin


def _second_session(settings, store, engine):
    """Another visitor's state on the same database."""
    state = AppState(settings, store, AuthService(engine))
    state.load()
    return state


def test_revoked_admin_loses_access_in_open_session(admin_state, settings, store, engine):
    admin_state.sign_up("helper@example.com", "secret1")
    assert admin_state.grant_admin("helper@example.com").ok

    helper = _second_session(settings, store, engine)
    assert helper.sign_in("helper@example.com", "secret1").ok
    assert helper.is_admin

    assert admin_state.revoke_admin("helper@example.com").ok
    assert not helper.is_admin
    notice = helper.save_about_text("Written after revoke")
    assert not notice.ok
    assert notice.message == "Admin access required"
    assert store.get_about_text() == "About us."
    assert helper.navigate(Section.ADMIN) is False
    assert helper.nav.active == Section.AUTH


def test_grant_takes_effect_in_open_session(admin_state, settings, store, engine):
    admin_state.sign_up("helper@example.com", "secret1")
    helper = _second_session(settings, store, engine)
    assert helper.sign_in("helper@example.com", "secret1").ok
    assert not helper.is_admin

    assert admin_state.grant_admin("helper@example.com").ok
    assert helper.is_admin
    assert helper.save_about_text("Written after grant").ok


def test_leaving_events_closes_event_detail(app_state):
    app_state.navigate(Section.EVENTS)
    app_state.selected_event_id = 3
    app_state.navigate(Section.EVENTS)
    assert app_state.selected_event_id == 3

    app_state.navigate(Section.GALLERY)
    assert app_state.selected_event_id is None
    app_state.navigate(Section.EVENTS)
    assert app_state.selected_event_id is None

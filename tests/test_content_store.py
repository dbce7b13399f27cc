"""Tests for the content store against a temporary SQLite database."""

import pytest
from sqlalchemy import text as sa_text

from core.errors import StoreError
from core.models import DEFAULT_GALLERY_ALT, UNKNOWN_DEPARTMENT, EventStatus, Upload

PNG = Upload(name="photo.png", data=b"\x89PNG fake bytes", content_type="image/png")


def _dept_id(store, name):
    return next(d.id for d in store.list_departments() if d.name == name)


def test_seeded_departments_and_about_text(store):
    assert [d.name for d in store.list_departments()] == ["Core", "Advisory"]
    assert store.get_about_text() == "About us."


def test_save_about_text_overwrites(store):
    store.save_about_text("New text")
    store.save_about_text("Newer text")
    assert store.get_about_text() == "Newer text"


def test_add_department_rejects_case_insensitive_duplicate(store):
    added = store.add_department("Technical")
    assert added.id is not None
    assert added.sort_order == 2
    with pytest.raises(StoreError, match="already exists"):
        store.add_department("technical")


def test_rename_missing_department_raises(store):
    with pytest.raises(StoreError, match="Department not found"):
        store.rename_department(9999, "Anything")


def test_members_carry_department_name(store):
    tech = store.add_department("Technical").id
    store.add_member("Gus", "Head", tech)
    [member] = store.list_members()
    assert member.department == "Technical"
    assert member.department_id == tech
    assert member.image.startswith("https://placehold.co/")


def test_deleting_department_leaves_members_unknown(store):
    tech = store.add_department("Technical").id
    store.add_member("Gus", "Head", tech)
    store.delete_department(tech)
    [member] = store.list_members()
    assert member.department == UNKNOWN_DEPARTMENT
    assert member.department_id == tech


def test_update_member_with_photo(store, storage):
    core = _dept_id(store, "Core")
    store.add_member("Asha", "President", core)
    member_id = store.list_members()[0].id
    store.update_member(member_id, "Asha K", "President", core, image=PNG)
    [member] = store.list_members()
    assert member.name == "Asha K"
    assert member.image.startswith("app/static/uploads/team/")
    assert storage.local_path(member.image).read_bytes() == PNG.data


def test_delete_missing_member_raises(store):
    with pytest.raises(StoreError, match="Team member not found"):
        store.delete_member(42)


def test_events_newest_first_with_gallery(store):
    store.add_event("Fest", "1 Jan 2025", "Short", "Long story", EventStatus.PAST, hero_image=PNG, gallery=[PNG, PNG])
    store.add_event("Meetup", "1 Jun 2025", "Soon", "", "upcoming")
    events = store.list_events()
    assert [e.title for e in events] == ["Meetup", "Fest"]

    meetup, fest = events
    assert meetup.status == EventStatus.UPCOMING
    assert meetup.description == "Soon"
    assert meetup.gallery == []
    assert fest.is_past
    assert fest.description == "Long story"
    assert fest.hero_image.startswith("app/static/uploads/events/")
    assert len(fest.gallery) == 2


def test_update_event_keeps_or_drops_existing_gallery(store):
    store.add_event("Fest", "1 Jan 2025", "Short", "", "past", gallery=[PNG])
    fest = store.list_events()[0]

    store.update_event(fest.id, "Fest", "1 Jan 2025", "Short", "", "past", gallery=[PNG], existing_gallery=fest.gallery)
    assert len(store.list_events()[0].gallery) == 2

    store.update_event(fest.id, "Fest", "1 Jan 2025", "Short", "", "past", existing_gallery=[])
    updated = store.list_events()[0]
    assert updated.gallery == []
    assert updated.hero_image == ""


def test_gallery_add_and_delete_removes_file(store, storage):
    store.add_gallery_image(PNG)
    store.add_gallery_image(PNG, alt="Stage night")
    images = store.list_gallery()
    assert [img.alt for img in images] == [DEFAULT_GALLERY_ALT, "Stage night"]

    path = storage.local_path(images[0].url)
    assert path.is_file()
    store.delete_gallery_image(images[0].id)
    assert not path.exists()
    assert [img.alt for img in store.list_gallery()] == ["Stage night"]


def test_delete_missing_event_raises(store):
    with pytest.raises(StoreError, match="Event not found"):
        store.delete_event(7)


def _stored_files(storage, folder):
    return sorted((storage.root / folder).glob("*"))


def test_failed_member_update_removes_new_photo(store, storage):
    with pytest.raises(StoreError, match="Team member not found"):
        store.update_member(999, "Nobody", "Head", None, image=PNG)
    assert _stored_files(storage, "team") == []


def test_failed_gallery_insert_removes_file(store, storage, engine):
    with engine.begin() as conn:
        conn.execute(sa_text("DROP TABLE gallery_images"))
    with pytest.raises(StoreError, match="Failed to add to gallery"):
        store.add_gallery_image(PNG)
    assert _stored_files(storage, "gallery") == []


def test_failed_event_update_removes_new_uploads(store, storage):
    with pytest.raises(StoreError, match="Event not found"):
        store.update_event(404, "Ghost", "1 Jan 2025", "", "", "past", hero_image=PNG, gallery=[PNG])
    assert _stored_files(storage, "events") == []

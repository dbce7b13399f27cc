"""Tests for schema discovery, table creation and seeding."""

from sqlalchemy import inspect, text as sa_text

from core.db import init_db
from core.schema_registry import registered_names

TABLES = {"site_content", "departments", "team_members", "events", "gallery_images", "users", "roles", "user_roles"}


def test_every_table_is_created(engine):
    assert TABLES <= set(inspect(engine).get_table_names())


def test_installers_are_registered(engine):
    names = registered_names()
    assert "ensure_events_schema" in names
    assert "ensure_users_schema" in names


def test_init_db_is_idempotent(engine, settings):
    init_db(engine, settings)
    init_db(engine, settings)
    with engine.begin() as conn:
        departments = conn.execute(sa_text("SELECT name FROM departments ORDER BY sort_order")).fetchall()
        admins = conn.execute(sa_text(
            "SELECT COUNT(*) FROM user_roles ur JOIN roles r ON r.id = ur.role_id WHERE r.name='admin'"
        )).scalar()
        users = conn.execute(sa_text("SELECT COUNT(*) FROM users")).scalar()
    assert [d[0] for d in departments] == ["Core", "Advisory"]
    assert admins == 1
    assert users == 1


def test_seeded_about_text_is_not_overwritten(engine, settings, store):
    store.save_about_text("Edited by an admin")
    init_db(engine, settings)
    assert store.get_about_text() == "Edited by an admin"

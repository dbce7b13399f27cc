"""Shared fixtures: a throwaway SQLite database, local upload storage and app state."""

import pytest

from core.app_state import AppState
from core.auth import AuthService
from core.content_store import ContentStore
from core.db import get_engine, init_db
from core.settings import (
    AppConfig,
    AuthConfig,
    DBConfig,
    Settings,
    StorageConfig,
    TeamConfig,
)
from core.storage import LocalStorage

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "change-me-now"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing the database and uploads into tmp_path."""
    return Settings(
        app=AppConfig(name="Test Committee", contact_email="team@example.com", about_text="About us."),
        auth=AuthConfig(bootstrap_admin_email=ADMIN_EMAIL, bootstrap_admin_password=ADMIN_PASSWORD),
        db=DBConfig(url=f"sqlite:///{tmp_path / 'db' / 'site.db'}"),
        storage=StorageConfig(root=str(tmp_path / "uploads"), public_url="app/static/uploads"),
        team=TeamConfig(),
    )


@pytest.fixture
def engine(settings):
    """Engine with every table created and the seeds applied."""
    eng = get_engine(settings.db.url)
    init_db(eng, settings)
    yield eng
    eng.dispose()


@pytest.fixture
def storage(settings):
    return LocalStorage(settings.storage.root, settings.storage.public_url)


@pytest.fixture
def store(engine, storage, settings):
    return ContentStore(engine, storage, default_about_text=settings.app.about_text)


@pytest.fixture
def auth(engine):
    return AuthService(engine, min_password_length=6)


@pytest.fixture
def app_state(settings, store, auth):
    """A visitor's state with the cache loaded and nobody signed in."""
    state = AppState(settings, store, auth)
    state.load()
    return state


@pytest.fixture
def admin_state(app_state):
    """app_state with the bootstrap admin signed in."""
    result = app_state.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)
    assert result.ok, result.error
    return app_state

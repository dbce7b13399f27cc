"""Tests for loading settings from YAML and environment overrides."""

import pytest
from pydantic import ValidationError

from core.settings import DEFAULT_SETTINGS_PATH, load_settings

MINIMAL = """
app:
  name: "Test Committee"
auth:
  bootstrap_admin_email: "root@example.com"
  bootstrap_admin_password: "secret123"
db:
  url: "sqlite:///:memory:"
"""


def test_default_settings_file_loads(monkeypatch):
    monkeypatch.delenv("COMMITTEE_SETTINGS", raising=False)
    monkeypatch.delenv("COMMITTEE_DB_URL", raising=False)
    settings = load_settings(DEFAULT_SETTINGS_PATH)
    assert settings.app.name
    assert settings.auth.min_password_length == 6
    assert "Technical" in settings.team.department_order


def test_optional_sections_fall_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("COMMITTEE_DB_URL", raising=False)
    path = tmp_path / "settings.yaml"
    path.write_text(MINIMAL, encoding="utf-8")
    settings = load_settings(path)
    assert settings.storage.root == "static/uploads"
    assert settings.team.skip_empty_departments is False
    assert settings.team.department_order == []
    assert settings.logging.level == "INFO"


def test_environment_overrides(tmp_path, monkeypatch):
    path = tmp_path / "settings.yaml"
    path.write_text(MINIMAL, encoding="utf-8")
    monkeypatch.setenv("COMMITTEE_SETTINGS", str(path))
    monkeypatch.setenv("COMMITTEE_DB_URL", "sqlite:///other.db")
    settings = load_settings()
    assert settings.app.name == "Test Committee"
    assert settings.db.url == "sqlite:///other.db"


def test_missing_required_field_is_rejected(tmp_path, monkeypatch):
    monkeypatch.delenv("COMMITTEE_DB_URL", raising=False)
    path = tmp_path / "settings.yaml"
    path.write_text(MINIMAL.replace('  bootstrap_admin_password: "secret123"\n', ""), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_settings(path)

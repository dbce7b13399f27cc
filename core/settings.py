from __future__ import annotations
import os
import yaml
from pathlib import Path
from typing import List
from pydantic import BaseModel

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[1] / "config" / "settings.yaml"

class AppConfig(BaseModel):
    name: str
    tagline: str = ""
    footer_text: str = "© {year} {name}"
    contact_email: str = ""
    about_text: str = ""

class AuthConfig(BaseModel):
    bootstrap_admin_email: str
    bootstrap_admin_password: str
    min_password_length: int = 6

class DBConfig(BaseModel):
    url: str

class StorageConfig(BaseModel):
    root: str = "static/uploads"
    public_url: str = "app/static/uploads"

class TeamConfig(BaseModel):
    skip_empty_departments: bool = False
    department_order: List[str] = []

class LoggingConfig(BaseModel):
    level: str = "INFO"

class Settings(BaseModel):
    app: AppConfig
    auth: AuthConfig
    db: DBConfig
    storage: StorageConfig = StorageConfig()
    team: TeamConfig = TeamConfig()
    logging: LoggingConfig = LoggingConfig()

def load_settings(path: str | Path | None = None) -> Settings:
    path = path or os.getenv("COMMITTEE_SETTINGS") or DEFAULT_SETTINGS_PATH
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    db_url = os.getenv("COMMITTEE_DB_URL")
    if db_url:
        data.setdefault("db", {})["url"] = db_url
    return Settings(
        app=AppConfig(**data["app"]),
        auth=AuthConfig(**data["auth"]),
        db=DBConfig(**data["db"]),
        storage=StorageConfig(**(data.get("storage") or {})),
        team=TeamConfig(**(data.get("team") or {})),
        logging=LoggingConfig(**(data.get("logging") or {})),
    )

# core/db.py
from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from core.schema_registry import auto_discover, run_all

if TYPE_CHECKING:
    from core.settings import Settings

SCHEMAS_DIR = Path(__file__).resolve().parents[1] / "schemas"

def get_engine(db_url: str) -> Engine:
    if db_url.startswith("sqlite:///"):
        db_file = db_url.replace("sqlite:///", "")
        if db_file and db_file != ":memory:":
            Path(db_file).parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(db_url, future=True)
    return engine

def init_db(engine: Engine, settings: Optional[Settings] = None) -> None:
    # 1) import every module in schemas/ so their @register installers are known
    auto_discover(SCHEMAS_DIR)

    # 2) create tables
    run_all(engine)

    # 3) seeds need settings (bootstrap admin, about text), so they run outside the registry
    if settings is not None:
        from schemas._seed import seed_all
        seed_all(engine, settings)

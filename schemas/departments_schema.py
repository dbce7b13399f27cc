# schemas/departments_schema.py
from sqlalchemy import text as sa_text
from core.schema_registry import register

@register
def ensure_departments_schema(engine):
    with engine.begin() as conn:
        conn.execute(sa_text("""
        CREATE TABLE IF NOT EXISTS departments (
          id INTEGER PRIMARY KEY AUTOINCREMENT,
          name TEXT NOT NULL UNIQUE COLLATE NOCASE,
          sort_order INTEGER,
          created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        );
        """))

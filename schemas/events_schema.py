# schemas/events_schema.py
from sqlalchemy import text as sa_text
from core.schema_registry import register

@register
def ensure_events_schema(engine):
    with engine.begin() as conn:
        conn.execute(sa_text("""
        CREATE TABLE IF NOT EXISTS events (
          id INTEGER PRIMARY KEY AUTOINCREMENT,
          title TEXT NOT NULL,
          date TEXT NOT NULL,
          description TEXT,
          full_description TEXT,
          hero_image TEXT,
          gallery_json TEXT NOT NULL DEFAULT '[]',
          status TEXT NOT NULL DEFAULT 'upcoming' CHECK (status IN ('past','upcoming')),
          created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        );
        """))

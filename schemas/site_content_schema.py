# schemas/site_content_schema.py
from sqlalchemy import text as sa_text
from core.schema_registry import register

@register
def ensure_site_content_schema(engine):
    with engine.begin() as conn:
        conn.execute(sa_text("""
        CREATE TABLE IF NOT EXISTS site_content (
          id TEXT PRIMARY KEY,
          content TEXT NOT NULL,
          updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
        );
        """))

# schemas/gallery_images_schema.py
from sqlalchemy import text as sa_text
from core.schema_registry import register

@register
def ensure_gallery_images_schema(engine):
    with engine.begin() as conn:
        conn.execute(sa_text("""
        CREATE TABLE IF NOT EXISTS gallery_images (
          id INTEGER PRIMARY KEY AUTOINCREMENT,
          url TEXT NOT NULL,
          alt TEXT,
          sort_order INTEGER,
          created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        );
        """))

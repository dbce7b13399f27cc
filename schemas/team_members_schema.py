# schemas/team_members_schema.py
from sqlalchemy import text as sa_text
from core.schema_registry import register

@register
def ensure_team_members_schema(engine):
    with engine.begin() as conn:
        # no foreign key on department_id: deleting a department leaves a dangling reference
        conn.execute(sa_text("""
        CREATE TABLE IF NOT EXISTS team_members (
          id INTEGER PRIMARY KEY AUTOINCREMENT,
          name TEXT NOT NULL,
          role TEXT NOT NULL,
          department_id INTEGER,
          image_url TEXT,
          sort_order INTEGER,
          created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        );
        """))
        conn.execute(sa_text("CREATE INDEX IF NOT EXISTS ix_team_members_dept ON team_members(department_id)"))

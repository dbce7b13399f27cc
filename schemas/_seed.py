# schemas/_seed.py
from __future__ import annotations

import logging
import os

import bcrypt
from sqlalchemy import text as sa_text

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────────────────────────
# Seeds run after every table exists (see core.db.init_db).
# Set SEED_RUN=0 to skip them entirely.
# ──────────────────────────────────────────────────────────────────────────────

ROLE_NAMES = ["admin"]

# Core holds the president and vice president, Advisory renders as its own block.
DEFAULT_DEPARTMENTS = ["Core", "Advisory"]

SEED_SHOULD_RUN = os.getenv("SEED_RUN", "1").lower() not in ("0", "false")

def _get_role_id(conn, role_name: str):
    row = conn.execute(sa_text("SELECT id FROM roles WHERE name=:n"), {"n": role_name}).fetchone()
    return row[0] if row else None

def _ensure_role(conn, role_name: str) -> int:
    conn.execute(sa_text("INSERT OR IGNORE INTO roles(name) VALUES(:n)"), {"n": role_name})
    return _get_role_id(conn, role_name)

def _get_user_id(conn, email: str):
    row = conn.execute(sa_text("SELECT id FROM users WHERE email=:e"), {"e": email}).fetchone()
    return row[0] if row else None

def seed_roles(engine) -> None:
    with engine.begin() as conn:
        for rn in ROLE_NAMES:
            _ensure_role(conn, rn)

def seed_bootstrap_admin(engine, email: str, password: str) -> None:
    """
    Idempotently ensure the bootstrap admin exists and holds the admin role.
    The password is only set when the account is first created; rotate it afterwards.
    """
    email = (email or "").strip().lower()
    if not email or not password:
        return
    with engine.begin() as conn:
        uid = _get_user_id(conn, email)
        if uid is None:
            pw_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
            conn.execute(
                sa_text("INSERT INTO users(email, password_hash, active) VALUES(:e, :ph, 1)"),
                {"e": email, "ph": pw_hash},
            )
            uid = _get_user_id(conn, email)
            logger.info("Seeded bootstrap admin %s", email)
        rid = _ensure_role(conn, "admin")
        conn.execute(
            sa_text("INSERT OR IGNORE INTO user_roles(user_id, role_id, granted_by) VALUES(:u, :r, 'seed')"),
            {"u": uid, "r": rid},
        )

def seed_departments(engine) -> None:
    with engine.begin() as conn:
        count = conn.execute(sa_text("SELECT COUNT(*) FROM departments")).scalar() or 0
        if count:
            return
        for i, name in enumerate(DEFAULT_DEPARTMENTS):
            conn.execute(
                sa_text("INSERT OR IGNORE INTO departments(name, sort_order) VALUES(:n, :o)"),
                {"n": name, "o": i},
            )

def seed_about_text(engine, text: str) -> None:
    if not text:
        return
    with engine.begin() as conn:
        conn.execute(
            sa_text("INSERT OR IGNORE INTO site_content(id, content) VALUES('about_text', :c)"),
            {"c": text},
        )

def seed_all(engine, settings) -> None:
    if not SEED_SHOULD_RUN:
        return
    seed_roles(engine)
    seed_bootstrap_admin(engine, settings.auth.bootstrap_admin_email, settings.auth.bootstrap_admin_password)
    seed_departments(engine)
    seed_about_text(engine, settings.app.about_text)

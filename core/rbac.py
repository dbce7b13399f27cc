# core/rbac.py
from __future__ import annotations
from typing import Dict, List, Optional, Set, Union
from sqlalchemy import text as sa_text
from sqlalchemy.engine import Engine, Connection
from sqlalchemy.exc import SQLAlchemyError

from core.errors import StoreError

__all__ = [
    "ADMIN_ROLE", "user_roles", "get_user_id", "grant_role", "revoke_role", "list_role_holders",
]

ADMIN_ROLE = "admin"

def _ensure_role_row(conn: Connection, role_name: str) -> Optional[int]:
    conn.execute(sa_text("INSERT OR IGNORE INTO roles(name) VALUES(:n)"), {"n": role_name})
    row = conn.execute(sa_text("SELECT id FROM roles WHERE name=:n"), {"n": role_name}).fetchone()
    return int(row[0]) if row else None

def user_roles(engine: Engine, email: Optional[str]) -> Set[str]:
    if not email:
        return set()
    with engine.begin() as conn:
        u = conn.execute(sa_text("SELECT id FROM users WHERE LOWER(email)=LOWER(:e) AND active=1"), {"e": email}).fetchone()
        if not u: return set()
        rows = conn.execute(sa_text(
            "SELECT r.name FROM user_roles ur JOIN roles r ON r.id = ur.role_id WHERE ur.user_id=:uid"
        ), {"uid": int(u[0])}).fetchall()
        return {r[0] for r in rows}

def get_user_id(engine_or_conn: Union[Engine, Connection], email: str) -> int:
    if isinstance(engine_or_conn, Engine):
        with engine_or_conn.begin() as conn:
            return get_user_id(conn, email)
    row = engine_or_conn.execute(sa_text("SELECT id FROM users WHERE LOWER(email)=LOWER(:e)"), {"e": email}).fetchone()
    if not row: raise StoreError(f"No account found for {email}")
    return int(row[0])

def _user_has_role(conn: Connection, user_id: int, role_name: str) -> bool:
    row = conn.execute(sa_text(
        "SELECT 1 FROM user_roles ur JOIN roles r ON r.id = ur.role_id WHERE ur.user_id=:u AND r.name=:r LIMIT 1"
    ), {"u": user_id, "r": role_name}).fetchone()
    return bool(row)

def _count_role_holders(conn: Connection, role_name: str) -> int:
    row = conn.execute(sa_text(
        "SELECT COUNT(*) FROM user_roles ur JOIN roles r ON r.id = ur.role_id WHERE r.name=:r"
    ), {"r": role_name}).fetchone()
    return int(row[0]) if row else 0

def grant_role(engine: Engine, email: str, role_name: str, granted_by: Optional[str] = None) -> None:
    """Grant ``role_name``; granting a role the user already holds is a conflict."""
    try:
        with engine.begin() as conn:
            uid = get_user_id(conn, email)
            if _user_has_role(conn, uid, role_name):
                raise StoreError(f"{email} already has the {role_name} role")
            rid = _ensure_role_row(conn, role_name)
            conn.execute(
                sa_text("INSERT INTO user_roles(user_id, role_id, granted_by) VALUES (:u, :rid, :by)"),
                {"u": uid, "rid": rid, "by": granted_by},
            )
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to grant {role_name} to {email}") from e

def revoke_role(engine: Engine, email: str, role_name: str) -> None:
    try:
        with engine.begin() as conn:
            uid = get_user_id(conn, email)
            if not _user_has_role(conn, uid, role_name):
                raise StoreError(f"{email} does not have the {role_name} role")
            if role_name == ADMIN_ROLE and _count_role_holders(conn, ADMIN_ROLE) <= 1:
                raise StoreError("Cannot revoke the only remaining admin.")
            rid = _ensure_role_row(conn, role_name)
            conn.execute(sa_text("DELETE FROM user_roles WHERE user_id=:u AND role_id=:rid"), {"u": uid, "rid": rid})
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to revoke {role_name} from {email}") from e

def list_role_holders(engine: Engine, role_name: str) -> List[Dict]:
    try:
        with engine.begin() as conn:
            rows = conn.execute(sa_text("""
                SELECT u.id AS user_id, u.email, u.active, ur.granted_by, ur.granted_at
                FROM users u
                JOIN user_roles ur ON ur.user_id = u.id
                JOIN roles r ON r.id = ur.role_id
                WHERE r.name = :r
                ORDER BY u.email
            """), {"r": role_name}).fetchall()
            return [dict(r._mapping) for r in rows]
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to load {role_name} list") from e

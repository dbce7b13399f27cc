# core/auth.py
"""
Account sign-up, sign-in and sign-out against the users table.

The session is any mutable mapping (st.session_state in the app, a dict in
tests); the signed-in user lives under SESSION_KEY.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, MutableMapping, Optional

import bcrypt
from sqlalchemy import text as sa_text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.errors import StoreError
from core.rbac import ADMIN_ROLE, user_roles

logger = logging.getLogger(__name__)

SESSION_KEY = "user"

ANONYMOUS = "anonymous"
MEMBER = "member"
ADMIN = "admin"

# AuthResult.reason values
REASON_VALIDATION = "validation"
REASON_CREDENTIALS = "credentials"
REASON_NOT_ADMIN = "not_admin"
REASON_CONFLICT = "conflict"
REASON_UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class AuthResult:
    ok: bool
    error: str = ""
    reason: str = ""
    user: Optional[Dict[str, Any]] = None

    @classmethod
    def success(cls, user: Optional[Dict[str, Any]] = None) -> "AuthResult":
        return cls(ok=True, user=user)

    @classmethod
    def failure(cls, error: str, reason: str) -> "AuthResult":
        return cls(ok=False, error=error, reason=reason)


def _hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def _check(password: str, pw_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), pw_hash.encode("utf-8"))
    except ValueError:
        # malformed hash in the table
        return False


class AuthService:
    def __init__(self, engine: Engine, min_password_length: int = 6):
        self.engine = engine
        self.min_password_length = min_password_length

    def _validate(self, email: str, password: str) -> Optional[str]:
        if not email or not password:
            return "Please fill in all fields"
        if len(password) < self.min_password_length:
            return f"Password must be at least {self.min_password_length} characters"
        return None

    def sign_up(self, email: str, password: str, confirm: Optional[str] = None) -> AuthResult:
        email = (email or "").strip().lower()
        problem = self._validate(email, password)
        if not problem and confirm is not None and password != confirm:
            problem = "Passwords do not match"
        if problem:
            return AuthResult.failure(problem, REASON_VALIDATION)
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    sa_text("INSERT INTO users(email, password_hash, active) VALUES(:e, :ph, 1)"),
                    {"e": email, "ph": _hash(password)},
                )
        except IntegrityError:
            return AuthResult.failure("User already registered", REASON_CONFLICT)
        except SQLAlchemyError:
            logger.exception("Sign-up failed for %s", email)
            return AuthResult.failure("Sign-up is unavailable right now, please try again", REASON_UNAVAILABLE)
        logger.info("New account %s", email)
        return AuthResult.success({"email": email})

    def sign_in(self, email: str, password: str, session: MutableMapping, require_admin: bool = False) -> AuthResult:
        """
        Check credentials and store the user in ``session``.
        With ``require_admin`` a valid non-admin account stays signed in but the
        result fails with REASON_NOT_ADMIN, so the caller can offer sign-out instead of retry.
        """
        email = (email or "").strip().lower()
        problem = self._validate(email, password)
        if problem:
            return AuthResult.failure(problem, REASON_VALIDATION)
        try:
            with self.engine.begin() as conn:
                row = conn.execute(
                    sa_text("SELECT id, email, password_hash FROM users WHERE LOWER(email)=:e AND active=1"),
                    {"e": email},
                ).fetchone()
            roles = user_roles(self.engine, email) if row else set()
        except SQLAlchemyError:
            logger.exception("Sign-in lookup failed for %s", email)
            return AuthResult.failure("Sign-in is unavailable right now, please try again", REASON_UNAVAILABLE)

        if not row or not _check(password, row._mapping["password_hash"]):
            logger.info("Rejected sign-in for %s", email)
            return AuthResult.failure("Invalid login credentials", REASON_CREDENTIALS)

        user = {"user_id": int(row._mapping["id"]), "email": row._mapping["email"], "roles": set(roles)}
        session[SESSION_KEY] = user
        logger.info("Signed in %s", email)
        if require_admin and ADMIN_ROLE not in roles:
            return AuthResult(
                ok=False,
                error="You are signed in, but this account does not have admin access.",
                reason=REASON_NOT_ADMIN,
                user=user,
            )
        return AuthResult.success(user)

    def sign_out(self, session: MutableMapping) -> AuthResult:
        user = session.pop(SESSION_KEY, None)
        if user:
            logger.info("Signed out %s", user.get("email"))
        return AuthResult.success()

    def current_user(self, session: MutableMapping) -> Optional[Dict[str, Any]]:
        return session.get(SESSION_KEY) or None

    def refresh_roles(self, session: MutableMapping) -> None:
        """Re-read the signed-in user's roles, e.g. after an admin grant or revoke."""
        user = self.current_user(session)
        if not user:
            return
        try:
            user["roles"] = user_roles(self.engine, user.get("email"))
        except SQLAlchemyError as e:
            raise StoreError("Failed to refresh roles") from e

    def is_admin(self, session: MutableMapping) -> bool:
        user = self.current_user(session)
        return bool(user) and ADMIN_ROLE in (user.get("roles") or set())

    def access_level(self, session: MutableMapping) -> str:
        if not self.current_user(session):
            return ANONYMOUS
        return ADMIN if self.is_admin(session) else MEMBER

# core/content_store.py
"""
Content store: read and write the site's content tables.

Every public method either returns plain records (see core.models) or raises
StoreError; callers never see SQLAlchemy exceptions.
"""

from __future__ import annotations
import contextlib
import functools
import json
import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import text as sa_text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from core.errors import StoreError
from core.models import (
    DEFAULT_GALLERY_ALT,
    UNKNOWN_DEPARTMENT,
    Department,
    Event,
    EventStatus,
    GalleryImage,
    Member,
    Upload,
)
from core.storage import LocalStorage

logger = logging.getLogger(__name__)

ABOUT_TEXT_ID = "about_text"
DEFAULT_ABOUT_TEXT = (
    "AAYAM Committee is a student-led college committee organizing cultural, sports, "
    "and management activities to build leadership, teamwork, and creativity."
)


def _store_call(action: str):
    """Turn database failures into StoreError('Failed to <action>')."""
    def _wrap(fn):
        @functools.wraps(fn)
        def _inner(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.exception("Store call %s failed", fn.__name__)
                raise StoreError(f"Failed to {action}") from e
        return _inner
    return _wrap


# ===========================================================================
# ROW MAPPERS
# ===========================================================================

def _member_from_row(row: Dict) -> Member:
    return Member(
        id=row["id"],
        name=row["name"],
        role=row["role"],
        department=row.get("department_name") or UNKNOWN_DEPARTMENT,
        department_id=row.get("department_id"),
        image=row.get("image_url") or "",
        sort_order=row.get("sort_order") or 0,
    )


def _event_from_row(row: Dict) -> Event:
    try:
        gallery = json.loads(row.get("gallery_json") or "[]") or []
    except json.JSONDecodeError:
        logger.warning("Event %s has a corrupt gallery list", row.get("id"))
        gallery = []
    short = row.get("description") or ""
    return Event(
        id=row["id"],
        title=row["title"],
        date=row["date"],
        short_description=short,
        description=row.get("full_description") or short,
        hero_image=row.get("hero_image") or "",
        gallery=[str(u) for u in gallery],
        status=EventStatus.parse(row.get("status")),
    )


class ContentStore:
    def __init__(self, engine: Engine, storage: LocalStorage, default_about_text: str = ""):
        self.engine = engine
        self.storage = storage
        self.default_about_text = default_about_text or DEFAULT_ABOUT_TEXT

    # -----------------------------------------------------------------------
    # helpers
    # -----------------------------------------------------------------------

    def _fetch_all(self, sql: str, params: dict = None) -> List[Dict]:
        with self.engine.begin() as conn:
            rows = conn.execute(sa_text(sql), params or {}).fetchall()
            return [dict(r._mapping) for r in rows]

    def _fetch_one(self, sql: str, params: dict = None) -> Optional[Dict]:
        with self.engine.begin() as conn:
            row = conn.execute(sa_text(sql), params or {}).fetchone()
            return dict(row._mapping) if row else None

    def _count(self, table: str) -> int:
        with self.engine.begin() as conn:
            return int(conn.execute(sa_text(f"SELECT COUNT(*) FROM {table}")).scalar() or 0)

    def _execute_one(self, sql: str, params: dict, what: str) -> None:
        """Run an UPDATE/DELETE that must touch exactly one row."""
        with self.engine.begin() as conn:
            result = conn.execute(sa_text(sql), params)
            if result.rowcount == 0:
                raise StoreError(f"{what} not found")

    def _remove_files(self, urls: Iterable[Optional[str]]) -> None:
        for url in urls:
            path = self.storage.local_path(url) if url else None
            if path is None:
                continue
            try:
                path.unlink(missing_ok=True)
            except OSError:
                logger.warning("Could not remove stored file %s", path)

    @contextlib.contextmanager
    def _discard_uploads_on_failure(self, urls: List[Optional[str]]):
        """Remove files uploaded for a row that then failed to save."""
        try:
            yield
        except (SQLAlchemyError, StoreError):
            self._remove_files(urls)
            raise

    # -----------------------------------------------------------------------
    # about text
    # -----------------------------------------------------------------------

    @_store_call("load content")
    def get_about_text(self) -> str:
        row = self._fetch_one("SELECT content FROM site_content WHERE id=:id", {"id": ABOUT_TEXT_ID})
        return row["content"] if row else self.default_about_text

    @_store_call("save content")
    def save_about_text(self, text: str) -> None:
        with self.engine.begin() as conn:
            conn.execute(sa_text("""
                INSERT INTO site_content (id, content) VALUES (:id, :c)
                ON CONFLICT(id) DO UPDATE SET content=excluded.content, updated_at=CURRENT_TIMESTAMP
            """), {"id": ABOUT_TEXT_ID, "c": text})

    # -----------------------------------------------------------------------
    # departments
    # -----------------------------------------------------------------------

    @_store_call("load departments")
    def list_departments(self) -> List[Department]:
        rows = self._fetch_all("SELECT id, name, sort_order FROM departments ORDER BY sort_order, id")
        return [Department(id=r["id"], name=r["name"], sort_order=r["sort_order"] or 0) for r in rows]

    @_store_call("add department")
    def add_department(self, name: str) -> Department:
        name = name.strip()
        with self.engine.begin() as conn:
            exists = conn.execute(
                sa_text("SELECT 1 FROM departments WHERE LOWER(name)=LOWER(:n)"), {"n": name}
            ).fetchone()
            if exists:
                raise StoreError(f"Department '{name}' already exists")
            order = conn.execute(sa_text("SELECT COUNT(*) FROM departments")).scalar() or 0
            result = conn.execute(
                sa_text("INSERT INTO departments (name, sort_order) VALUES (:n, :o)"), {"n": name, "o": order}
            )
            return Department(id=result.lastrowid, name=name, sort_order=order)

    @_store_call("rename department")
    def rename_department(self, department_id: int, name: str) -> None:
        self._execute_one(
            "UPDATE departments SET name=:n WHERE id=:id",
            {"n": name.strip(), "id": department_id},
            "Department",
        )

    @_store_call("delete department")
    def delete_department(self, department_id: int) -> None:
        # members keep their department_id and read back as "Unknown"
        self._execute_one("DELETE FROM departments WHERE id=:id", {"id": department_id}, "Department")

    # -----------------------------------------------------------------------
    # team members
    # -----------------------------------------------------------------------

    @_store_call("load team")
    def list_members(self) -> List[Member]:
        rows = self._fetch_all("""
            SELECT m.id, m.name, m.role, m.department_id, m.image_url, m.sort_order,
                   d.name AS department_name
            FROM team_members m
            LEFT JOIN departments d ON d.id = m.department_id
            ORDER BY m.sort_order, m.id
        """)
        return [_member_from_row(r) for r in rows]

    @_store_call("add team member")
    def add_member(self, name: str, role: str, department_id: Optional[int], image: Optional[Upload] = None) -> None:
        image_url = self.storage.upload("team", image) if image else None
        with self._discard_uploads_on_failure([image_url]):
            order = self._count("team_members")
            with self.engine.begin() as conn:
                conn.execute(sa_text("""
                    INSERT INTO team_members (name, role, department_id, image_url, sort_order)
                    VALUES (:n, :r, :d, :img, :o)
                """), {"n": name.strip(), "r": role.strip(), "d": department_id, "img": image_url, "o": order})

    @_store_call("update team member")
    def update_member(
        self, member_id: int, name: str, role: str, department_id: Optional[int], image: Optional[Upload] = None
    ) -> None:
        params = {"id": member_id, "n": name.strip(), "r": role.strip(), "d": department_id}
        sets = "name=:n, role=:r, department_id=:d"
        if image:
            params["img"] = self.storage.upload("team", image)
            sets += ", image_url=:img"
        with self._discard_uploads_on_failure([params.get("img")]):
            self._execute_one(f"UPDATE team_members SET {sets} WHERE id=:id", params, "Team member")

    @_store_call("delete team member")
    def delete_member(self, member_id: int) -> None:
        self._execute_one("DELETE FROM team_members WHERE id=:id", {"id": member_id}, "Team member")

    # -----------------------------------------------------------------------
    # events
    # -----------------------------------------------------------------------

    @_store_call("load events")
    def list_events(self) -> List[Event]:
        rows = self._fetch_all("SELECT * FROM events ORDER BY created_at DESC, id DESC")
        return [_event_from_row(r) for r in rows]

    def _upload_gallery(self, files: Iterable[Upload]) -> List[str]:
        urls = []
        for f in files or []:
            try:
                urls.append(self.storage.upload("events", f))
            except StoreError:
                # one bad gallery file should not lose the whole event
                logger.warning("Skipping gallery upload %s", f.name)
        return urls

    def _upload_hero(self, hero: Optional[Upload]) -> Optional[str]:
        if not hero:
            return None
        try:
            return self.storage.upload("events", hero)
        except StoreError:
            logger.warning("Skipping hero upload %s", hero.name)
            return None

    @_store_call("add event")
    def add_event(
        self,
        title: str,
        date: str,
        description: str,
        full_description: str,
        status: EventStatus | str,
        hero_image: Optional[Upload] = None,
        gallery: Optional[Iterable[Upload]] = None,
    ) -> None:
        hero_url = self._upload_hero(hero_image)
        gallery_urls = self._upload_gallery(gallery)
        with self._discard_uploads_on_failure([hero_url] + gallery_urls), self.engine.begin() as conn:
            conn.execute(sa_text("""
                INSERT INTO events (title, date, description, full_description, hero_image, gallery_json, status)
                VALUES (:t, :d, :desc, :full, :hero, :gal, :s)
            """), {
                "t": title.strip(), "d": date.strip(), "desc": description, "full": full_description,
                "hero": hero_url, "gal": json.dumps(gallery_urls), "s": EventStatus.parse(status).value,
            })

    @_store_call("update event")
    def update_event(
        self,
        event_id: int,
        title: str,
        date: str,
        description: str,
        full_description: str,
        status: EventStatus | str,
        hero_image: Optional[Upload] = None,
        gallery: Optional[Iterable[Upload]] = None,
        existing_gallery: Optional[List[str]] = None,
    ) -> None:
        params = {
            "id": event_id, "t": title.strip(), "d": date.strip(), "desc": description,
            "full": full_description, "s": EventStatus.parse(status).value,
        }
        sets = "title=:t, date=:d, description=:desc, full_description=:full, status=:s, gallery_json=:gal"
        hero_url = self._upload_hero(hero_image)
        if hero_url:
            params["hero"] = hero_url
            sets += ", hero_image=:hero"
        new_urls = self._upload_gallery(gallery)
        params["gal"] = json.dumps(list(existing_gallery or []) + new_urls)
        with self._discard_uploads_on_failure([hero_url] + new_urls):
            self._execute_one(f"UPDATE events SET {sets} WHERE id=:id", params, "Event")

    @_store_call("delete event")
    def delete_event(self, event_id: int) -> None:
        self._execute_one("DELETE FROM events WHERE id=:id", {"id": event_id}, "Event")

    # -----------------------------------------------------------------------
    # gallery
    # -----------------------------------------------------------------------

    @_store_call("load gallery")
    def list_gallery(self) -> List[GalleryImage]:
        rows = self._fetch_all("SELECT id, url, alt, sort_order FROM gallery_images ORDER BY sort_order, id")
        return [
            GalleryImage(id=r["id"], url=r["url"], alt=r["alt"] or DEFAULT_GALLERY_ALT, sort_order=r["sort_order"] or 0)
            for r in rows
        ]

    @_store_call("add to gallery")
    def add_gallery_image(self, image: Upload, alt: Optional[str] = None) -> None:
        url = self.storage.upload("gallery", image)
        with self._discard_uploads_on_failure([url]):
            order = self._count("gallery_images")
            with self.engine.begin() as conn:
                conn.execute(
                    sa_text("INSERT INTO gallery_images (url, alt, sort_order) VALUES (:u, :a, :o)"),
                    {"u": url, "a": (alt or "").strip() or DEFAULT_GALLERY_ALT, "o": order},
                )

    @_store_call("delete image")
    def delete_gallery_image(self, image_id: int) -> None:
        row = self._fetch_one("SELECT url FROM gallery_images WHERE id=:id", {"id": image_id})
        self._execute_one("DELETE FROM gallery_images WHERE id=:id", {"id": image_id}, "Image")
        if row:
            self._remove_files([row["url"]])

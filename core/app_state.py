# core/app_state.py
"""
Application state for one visitor session.

AppState owns the cached copy of the site content, the auth session and the
navigation state. Screens read from the cache and change things only through
the mutation methods below; each one validates first (raising
ValidationError), then calls the store and refreshes just the affected cache.
Store failures come back as a failed Notice and leave the cache untouched.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from core.auth import AuthResult, AuthService
from core.content_store import ContentStore
from core.errors import StoreError, ValidationError
from core.models import (
    CORE_DEPARTMENT,
    Department,
    Event,
    EventStatus,
    GalleryImage,
    Member,
    Upload,
)
from core.navigation import NavigationState, Section
from core.rbac import ADMIN_ROLE, grant_role, list_role_holders, revoke_role
from core.roster import Roster, group_roster
from core.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    """Outcome of a store call, shown to the user as a transient notification."""
    ok: bool
    message: str


@dataclass
class ContentCache:
    about_text: str = ""
    departments: List[Department] = field(default_factory=list)
    members: List[Member] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)
    gallery: List[GalleryImage] = field(default_factory=list)


class AppState:
    def __init__(self, settings: Settings, store: ContentStore, auth: AuthService):
        self.settings = settings
        self.store = store
        self.auth = auth
        self.cache = ContentCache()
        self.nav = NavigationState()
        self.session: Dict = {}
        self.selected_event_id: Optional[int] = None
        self.load_error: Optional[str] = None

    # =======================================================================
    # READ PATH
    # =======================================================================

    def load(self) -> None:
        """Fetch every resource into the cache; clears the loading flag either way."""
        self.nav.loading = True
        try:
            self.cache = ContentCache(
                about_text=self.store.get_about_text(),
                departments=self.store.list_departments(),
                members=self.store.list_members(),
                events=self.store.list_events(),
                gallery=self.store.list_gallery(),
            )
            self.load_error = None
        except StoreError as e:
            logger.warning("Content load failed: %s", e)
            self.load_error = str(e)
        finally:
            self.nav.loading = False

    def department_names(self) -> List[str]:
        return [d.name for d in self.cache.departments]

    def department_by_name(self, name: str) -> Optional[Department]:
        key = (name or "").strip().casefold()
        return next((d for d in self.cache.departments if d.name.casefold() == key), None)

    def roster(self) -> Roster:
        team = self.settings.team
        return group_roster(
            self.cache.members,
            self.department_names(),
            department_order=team.department_order or None,
            skip_empty=team.skip_empty_departments,
        )

    def past_events(self) -> List[Event]:
        return [e for e in self.cache.events if e.status == EventStatus.PAST]

    def upcoming_events(self) -> List[Event]:
        return [e for e in self.cache.events if e.status == EventStatus.UPCOMING]

    # =======================================================================
    # NAVIGATION + AUTH
    # =======================================================================

    @property
    def is_admin(self) -> bool:
        """Admin check against the current role rows; another admin may have granted or revoked since sign-in."""
        try:
            self.auth.refresh_roles(self.session)
        except StoreError as e:
            logger.warning("Role refresh failed, treating session as non-admin: %s", e)
            return False
        return self.auth.is_admin(self.session)

    @property
    def user(self) -> Optional[Dict]:
        return self.auth.current_user(self.session)

    def navigate(self, target: "str | Section") -> bool:
        before = self.nav.active
        honoured = self.nav.navigate(target, self.is_admin)
        if self.nav.active != before:
            # leaving a section closes its detail view
            self.selected_event_id = None
        return honoured

    def sign_in(self, email: str, password: str, on_success: Optional[Callable[[], None]] = None) -> AuthResult:
        # a redirect away from admin means the visitor wants the admin panel
        require_admin = self.nav.redirected_from == Section.ADMIN
        result = self.auth.sign_in(email, password, self.session, require_admin=require_admin)
        if result.ok and on_success is not None:
            on_success()
        return result

    def sign_up(self, email: str, password: str, confirm: Optional[str] = None) -> AuthResult:
        return self.auth.sign_up(email, password, confirm)

    def sign_out(self) -> AuthResult:
        result = self.auth.sign_out(self.session)
        self.nav.on_logout()
        self.selected_event_id = None
        return result

    # =======================================================================
    # MUTATIONS
    # =======================================================================

    def _mutate(self, action: Callable[[], None], refresh: Callable[[], None], success: str) -> Notice:
        if not self.is_admin:
            return Notice(False, "Admin access required")
        try:
            action()
        except StoreError as e:
            logger.warning("Store call failed: %s", e)
            return Notice(False, str(e))
        try:
            refresh()
        except StoreError as e:
            logger.warning("Refresh after change failed: %s", e)
            return Notice(True, f"{success} (reload the page to see it)")
        return Notice(True, success)

    def _refresh_departments(self) -> None:
        self.cache.departments = self.store.list_departments()

    def _refresh_members(self) -> None:
        self.cache.members = self.store.list_members()

    def _refresh_team(self) -> None:
        departments = self.store.list_departments()
        members = self.store.list_members()
        self.cache.departments, self.cache.members = departments, members

    def _refresh_events(self) -> None:
        self.cache.events = self.store.list_events()

    def _refresh_gallery(self) -> None:
        self.cache.gallery = self.store.list_gallery()

    def _refresh_about(self) -> None:
        self.cache.about_text = self.store.get_about_text()

    # --- home --------------------------------------------------------------

    def save_about_text(self, text: str) -> Notice:
        return self._mutate(lambda: self.store.save_about_text(text), self._refresh_about, "Home content saved!")

    # --- departments -------------------------------------------------------

    def add_department(self, name: str) -> Notice:
        errors = Department(name=name or "").validate()
        if errors:
            raise ValidationError(errors)
        return self._mutate(lambda: self.store.add_department(name), self._refresh_departments, "Department added!")

    def rename_department(self, department_id: int, name: str) -> Notice:
        errors = Department(name=name or "").validate()
        if errors:
            raise ValidationError(errors)
        return self._mutate(
            lambda: self.store.rename_department(department_id, name), self._refresh_team, "Department renamed!"
        )

    def delete_department(self, department_id: int) -> Notice:
        # members are not touched; the team refresh shows them as "Unknown"
        return self._mutate(lambda: self.store.delete_department(department_id), self._refresh_team, "Department deleted!")

    # --- team members ------------------------------------------------------

    def save_member(
        self,
        name: str,
        role: str,
        department_id: Optional[int],
        image: Optional[Upload] = None,
        member_id: Optional[int] = None,
    ) -> Notice:
        errors = Member(name=name or "", role=role or "").validate()
        if errors:
            raise ValidationError(errors)
        if member_id is None:
            return self._mutate(
                lambda: self.store.add_member(name, role, department_id, image),
                self._refresh_members,
                "Team member added!",
            )
        return self._mutate(
            lambda: self.store.update_member(member_id, name, role, department_id, image),
            self._refresh_members,
            "Team member updated!",
        )

    def delete_member(self, member_id: int) -> Notice:
        return self._mutate(lambda: self.store.delete_member(member_id), self._refresh_members, "Team member deleted!")

    # --- events ------------------------------------------------------------

    def save_event(
        self,
        title: str,
        date: str,
        description: str = "",
        full_description: str = "",
        status: "EventStatus | str" = EventStatus.UPCOMING,
        hero_image: Optional[Upload] = None,
        gallery: Optional[Iterable[Upload]] = None,
        event_id: Optional[int] = None,
        existing_gallery: Optional[List[str]] = None,
    ) -> Notice:
        errors = Event(title=title or "", date=date or "").validate()
        if errors:
            raise ValidationError(errors)
        if event_id is None:
            return self._mutate(
                lambda: self.store.add_event(title, date, description, full_description, status, hero_image, gallery),
                self._refresh_events,
                "Event added!",
            )
        return self._mutate(
            lambda: self.store.update_event(
                event_id, title, date, description, full_description, status, hero_image, gallery, existing_gallery
            ),
            self._refresh_events,
            "Event updated!",
        )

    def delete_event(self, event_id: int) -> Notice:
        return self._mutate(lambda: self.store.delete_event(event_id), self._refresh_events, "Event deleted!")

    # --- gallery -----------------------------------------------------------

    def add_gallery_image(self, image: Optional[Upload], alt: Optional[str] = None) -> Notice:
        if image is None or not image.data:
            raise ValidationError("Please choose an image to upload")
        return self._mutate(
            lambda: self.store.add_gallery_image(image, alt), self._refresh_gallery, "Image added to gallery!"
        )

    def delete_gallery_image(self, image_id: int) -> Notice:
        return self._mutate(lambda: self.store.delete_gallery_image(image_id), self._refresh_gallery, "Image deleted!")

    # --- admins ------------------------------------------------------------

    def list_admins(self) -> List[Dict]:
        return list_role_holders(self.store.engine, ADMIN_ROLE)

    def grant_admin(self, email: str) -> Notice:
        email = (email or "").strip().lower()
        if not email:
            raise ValidationError("Email is required")
        granted_by = (self.user or {}).get("email")
        return self._mutate(
            lambda: grant_role(self.store.engine, email, ADMIN_ROLE, granted_by=granted_by),
            lambda: None,
            f"{email} is now an admin",
        )

    def revoke_admin(self, email: str) -> Notice:
        email = (email or "").strip().lower()
        me = ((self.user or {}).get("email") or "").lower()
        if email and email == me:
            return Notice(False, "You cannot revoke your own admin access")
        return self._mutate(
            lambda: revoke_role(self.store.engine, email, ADMIN_ROLE),
            lambda: None,
            f"Admin access revoked for {email}",
        )

    def deletable_departments(self) -> List[Department]:
        return [d for d in self.cache.departments if d.name.casefold() != CORE_DEPARTMENT.casefold()]


def create_app_state(settings: Settings, engine) -> AppState:
    """Wire the store, storage and auth service for one session around ``engine``."""
    from core.storage import LocalStorage

    storage = LocalStorage(settings.storage.root, settings.storage.public_url)
    store = ContentStore(engine, storage, default_about_text=settings.app.about_text)
    auth = AuthService(engine, min_password_length=settings.auth.min_password_length)
    return AppState(settings, store, auth)

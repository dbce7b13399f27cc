# core/navigation.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


class Section(str, Enum):
    HOME = "home"
    TEAM = "team"
    EVENTS = "events"
    GALLERY = "gallery"
    CONTACT = "contact"
    AUTH = "auth"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: "str | Section") -> "Section":
        if isinstance(value, Section):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            raise ValueError(f"Unknown section: {value!r}") from None


# Public nav bar; auth and admin are reached through the footer link.
NAV_ITEMS: List[Tuple[Section, str]] = [
    (Section.HOME, "Home"),
    (Section.TEAM, "Team"),
    (Section.EVENTS, "Events"),
    (Section.GALLERY, "Gallery"),
    (Section.CONTACT, "Contact"),
]


def resolve_target(requested: "str | Section", is_admin: bool) -> Section:
    """Section that actually becomes active for a navigation request."""
    section = Section.parse(requested)
    if section == Section.ADMIN and not is_admin:
        return Section.AUTH
    return section


@dataclass
class NavigationState:
    """Which section is active, and whether site content is still loading."""
    active: Section = Section.HOME
    loading: bool = True
    # set when the last request was redirected, e.g. admin -> auth
    redirected_from: Optional[Section] = None

    def navigate(self, target: "str | Section", is_admin: bool) -> bool:
        """
        Activate ``target``, redirecting admin requests without admin rights to auth.
        Returns True when the request was honoured as asked (the shell scrolls to top).
        """
        requested = Section.parse(target)
        self.active = resolve_target(requested, is_admin)
        honoured = self.active == requested
        self.redirected_from = None if honoured else requested
        return honoured

    def on_auth_success(self) -> None:
        self.active = Section.HOME
        self.redirected_from = None

    def on_logout(self) -> None:
        self.active = Section.HOME
        self.redirected_from = None

    def visible_section(self) -> Optional[Section]:
        return None if self.loading else self.active

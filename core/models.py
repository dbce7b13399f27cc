# core/models.py
"""
Records held by the content store and cached by the application state.
Contains enums, dataclasses, and validation logic.
"""

from __future__ import annotations
from typing import Optional, List
from dataclasses import dataclass, field
from enum import Enum

UNKNOWN_DEPARTMENT = "Unknown"
CORE_DEPARTMENT = "Core"
ADVISORY_DEPARTMENT = "Advisory"
DEFAULT_GALLERY_ALT = "Gallery image"


def placeholder_image(name: str, size: str = "115x115") -> str:
    initial = (name or "?").strip()[:1] or "?"
    return f"https://placehold.co/{size}?text={initial}"


# ============================================================================
# ENUMS
# ============================================================================

class EventStatus(str, Enum):
    PAST = "past"
    UPCOMING = "upcoming"

    @classmethod
    def parse(cls, value: Optional[str]) -> "EventStatus":
        # anything that is not explicitly past is treated as upcoming
        return cls.PAST if (value or "").strip().lower() == cls.PAST.value else cls.UPCOMING


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass(frozen=True)
class Upload:
    """A file handed over by a form widget, before it reaches storage."""
    name: str
    data: bytes
    content_type: Optional[str] = None


@dataclass
class Department:
    name: str
    sort_order: int = 0
    id: Optional[int] = None

    def validate(self) -> List[str]:
        errors = []
        if not self.name or not self.name.strip():
            errors.append("Department name is required")
        elif len(self.name.strip()) > 80:
            errors.append("Department name must be 80 characters or less")
        return errors


@dataclass
class Member:
    """A roster entry. ``department`` is the resolved name, UNKNOWN_DEPARTMENT if dangling."""
    name: str
    role: str
    department: str = UNKNOWN_DEPARTMENT
    image: str = ""
    department_id: Optional[int] = None
    sort_order: int = 0
    id: Optional[int] = None

    def __post_init__(self):
        if not self.image:
            self.image = placeholder_image(self.name)

    def validate(self) -> List[str]:
        errors = []
        if not self.name or not self.name.strip():
            errors.append("Name is required")
        if not self.role or not self.role.strip():
            errors.append("Role is required")
        return errors


@dataclass
class Event:
    title: str
    date: str
    short_description: str = ""
    description: str = ""
    hero_image: str = ""
    gallery: List[str] = field(default_factory=list)
    status: EventStatus = EventStatus.UPCOMING
    id: Optional[int] = None

    @property
    def is_past(self) -> bool:
        return self.status == EventStatus.PAST

    def validate(self) -> List[str]:
        errors = []
        if not self.title or not self.title.strip():
            errors.append("Title is required")
        if not self.date or not self.date.strip():
            errors.append("Date is required")
        return errors


@dataclass
class GalleryImage:
    url: str
    alt: str = DEFAULT_GALLERY_ALT
    sort_order: int = 0
    id: Optional[int] = None

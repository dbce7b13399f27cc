# core/ordering.py
"""
Display ordering for the team roster.

Roles and departments are free text, so both are ranked by matching against a
fixed keyword list. Anything that does not match gets UNRANKED and sorts last;
sorts are stable, so unranked entries keep their encounter order.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence

UNRANKED = 999

# Rank order within a department.
ROLE_ORDER = ("Head", "Vice Head", "Secretary", "Vice Secretary")

# Department display order.
DEPARTMENT_ORDER = (
    "Advisory",
    "Management Department",
    "Media Department",
    "Sports & Cultural Head",
    "Sports Department",
    "Cultural Department",
    "Technical",
)

# Longer keywords that contain a keyword, e.g. "Vice Head" for "Head".
_CONTAINING = {
    keyword: [other.casefold() for other in ROLE_ORDER if other != keyword and keyword.casefold() in other.casefold()]
    for keyword in ROLE_ORDER
}


def role_rank(role: Optional[str]) -> int:
    """
    Index of the first ROLE_ORDER keyword found in ``role`` (case-insensitive).
    A keyword only counts outside the longer keywords containing it, so
    "Vice Head" does not match "Head" while "Head & Secretary" still does.
    """
    text = (role or "").casefold()
    for i, keyword in enumerate(ROLE_ORDER):
        remaining = text
        for longer in _CONTAINING[keyword]:
            remaining = remaining.replace(longer, "|")
        if keyword.casefold() in remaining:
            return i
    return UNRANKED


def _norm(name: Optional[str]) -> str:
    return (name or "").strip().casefold()


def department_rank(name: Optional[str], order: Optional[Sequence[str]] = None) -> int:
    order = DEPARTMENT_ORDER if not order else order
    key = _norm(name)
    for i, candidate in enumerate(order):
        if _norm(candidate) == key:
            return i
    return UNRANKED


def sort_departments(names: Iterable[str], order: Optional[Sequence[str]] = None) -> List[str]:
    return sorted(names, key=lambda n: department_rank(n, order))

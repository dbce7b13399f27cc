# core/roster.py
"""
Groups the flat member list into the blocks the team page renders:
president and vice president from Core, the Advisory block, then one
group per remaining department.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from core.models import ADVISORY_DEPARTMENT, CORE_DEPARTMENT, Member
from core.ordering import role_rank, sort_departments


@dataclass(frozen=True)
class DepartmentGroup:
    name: str
    members: List[Member] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.members


@dataclass(frozen=True)
class Roster:
    president: Optional[Member] = None
    vice_president: Optional[Member] = None
    core: List[Member] = field(default_factory=list)
    advisory: List[Member] = field(default_factory=list)
    departments: List[DepartmentGroup] = field(default_factory=list)

    def all_members(self) -> List[Member]:
        out = list(self.core) + list(self.advisory)
        for group in self.departments:
            out.extend(group.members)
        return out


def _key(name: Optional[str]) -> str:
    return (name or "").strip().casefold()


def _is_president(role: str) -> bool:
    r = (role or "").casefold()
    return "president" in r and "vice" not in r


def _is_vice_president(role: str) -> bool:
    return "vice president" in (role or "").casefold()


def group_roster(
    members: Iterable[Member],
    departments: Iterable[str],
    *,
    department_order: Optional[Sequence[str]] = None,
    skip_empty: bool = False,
) -> Roster:
    """
    Partition ``members`` by department.

    Only members whose department appears in ``departments`` are placed; each
    of them lands in exactly one of core, advisory or a department group.
    Department groups are ordered by ``department_order`` and their members by
    role rank, both stable. Empty department groups are kept unless
    ``skip_empty`` is set.
    """
    members = list(members)
    core_key, advisory_key = _key(CORE_DEPARTMENT), _key(ADVISORY_DEPARTMENT)

    names: List[str] = []
    seen = set()
    for name in departments:
        k = _key(name)
        if not k or k in seen:
            continue
        seen.add(k)
        names.append(name.strip())

    core = [m for m in members if _key(m.department) == core_key] if core_key in seen else []
    advisory = [m for m in members if _key(m.department) == advisory_key] if advisory_key in seen else []

    president = next((m for m in core if _is_president(m.role)), None)
    vice_president = next((m for m in core if _is_vice_president(m.role)), None)

    groups: List[DepartmentGroup] = []
    regular = [n for n in names if _key(n) not in (core_key, advisory_key)]
    for name in sort_departments(regular, department_order):
        in_dept = [m for m in members if _key(m.department) == _key(name)]
        in_dept.sort(key=lambda m: role_rank(m.role))
        if skip_empty and not in_dept:
            continue
        groups.append(DepartmentGroup(name=name, members=in_dept))

    return Roster(
        president=president,
        vice_president=vice_president,
        core=core,
        advisory=advisory,
        departments=groups,
    )

"""
Organizational Hierarchy — Core Domain Types

Pure data. No behaviour beyond serialisation helpers.

────────────────────────────────────────────────
DOMAIN GLOSSARY
────────────────────────────────────────────────

Department head:
    The first-discovered employer declaring a department name.
    Canonical drill-down root for that department.

Synthetic root:
    A non-data node introduced only when the records yield zero or
    several natural top-level nodes.

Expanded path:
    Ancestor ids that must be rendered open to reveal a highlighted node.

────────────────────────────────────────────────
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


class PersonKind(str, Enum):
    """Which collection a record came from."""

    EMPLOYEE = "employee"
    EMPLOYER = "employer"


class ViewMode(str, Enum):
    """The two navigation states."""

    MACRO_GRID = "MACRO_GRID"
    MICRO_TREE = "MICRO_TREE"


@dataclass(frozen=True)
class HierarchyConstants:
    """
    Tunables for tree construction.

    virtual_root_id must lie outside the real (positive) id space.
    """

    unassigned_department: str = "Unassigned"
    virtual_root_id: int = -1
    virtual_root_name: str = ""
    employers_first: bool = True


# ── Input Records ─────────────────────────────────────────────

@dataclass(frozen=True)
class PersonRecord:
    """
    One normalized employee or employer record.

    Immutable: the core never mutates source records.
    declared_department is only meaningful for employers.
    """

    id: int
    name: str
    kind: PersonKind
    manager_id: Optional[int] = None
    position: str = ""
    declared_department: str = ""
    email: str = ""
    salary: Optional[float] = None
    hire_date: str = ""
    status: str = ""

    @property
    def is_employer(self) -> bool:
        return self.kind is PersonKind.EMPLOYER


# ── Tree Nodes ────────────────────────────────────────────────

@dataclass(eq=False)
class HierarchyNode:
    """
    Working unit of the tree.

    Each node exclusively owns its children list. Identity equality:
    two nodes are the same only if they are the same object.
    """

    id: int
    name: str
    position: str = ""
    department: str = ""
    manager_id: Optional[int] = None
    children: List["HierarchyNode"] = field(default_factory=list)
    email: str = ""
    salary: Optional[float] = None
    hire_date: str = ""
    status: str = ""
    is_employer: bool = False
    is_virtual: bool = False

    def to_dict(self, include_children: bool = True) -> dict:
        """
        Serialise to a plain dict.

        include_children=True nests the whole subtree under "children";
        otherwise only "child_ids" is emitted (flat-list form).
        """
        if not include_children:
            return dict(self._fields(), child_ids=[c.id for c in self.children])
        # Iterative: deep manager chains must not hit the recursion limit.
        out = dict(self._fields(), children=[])
        stack: List[Tuple[HierarchyNode, dict]] = [(self, out)]
        while stack:
            node, target = stack.pop()
            for child in node.children:
                child_dict = dict(child._fields(), children=[])
                target["children"].append(child_dict)
                stack.append((child, child_dict))
        return out

    def _fields(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position,
            "department": self.department,
            "manager_id": self.manager_id,
            "email": self.email,
            "salary": self.salary,
            "hire_date": self.hire_date,
            "status": self.status,
            "is_employer": self.is_employer,
            "is_virtual": self.is_virtual,
        }


# ── Projections ───────────────────────────────────────────────

@dataclass(frozen=True)
class DepartmentSummary:
    """One row of the department overview grid."""

    name: str
    head_id: int
    head_name: str
    employee_count: int

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "head_id": self.head_id,
            "head_name": self.head_name,
            "employee_count": self.employee_count,
        }


@dataclass(frozen=True)
class NavigationState:
    """
    Immutable snapshot of the navigation state machine.

    current_root is held by reference for rendering but is rebound by id
    after every rebuild.
    """

    view_mode: ViewMode = ViewMode.MACRO_GRID
    current_root: Optional[HierarchyNode] = None
    search_highlight: Optional[int] = None
    expanded_path: FrozenSet[int] = frozenset()

    def to_dict(self) -> dict:
        return {
            "view_mode": self.view_mode.value,
            "current_root_id": self.current_root.id if self.current_root else None,
            "search_highlight": self.search_highlight,
            "expanded_path": sorted(self.expanded_path),
        }


@dataclass(frozen=True)
class BuildReport:
    """
    What the builder had to normalize while constructing a tree.

    All id lists are in input-processing order.
    """

    natural_root_ids: Tuple[int, ...] = ()
    cycle_break_ids: Tuple[int, ...] = ()
    dangling_manager_ids: Tuple[int, ...] = ()
    self_managed_ids: Tuple[int, ...] = ()
    duplicate_ids: Tuple[int, ...] = ()
    has_virtual_root: bool = False

    def to_dict(self) -> dict:
        return {
            "natural_root_ids": list(self.natural_root_ids),
            "cycle_break_ids": list(self.cycle_break_ids),
            "dangling_manager_ids": list(self.dangling_manager_ids),
            "self_managed_ids": list(self.self_managed_ids),
            "duplicate_ids": list(self.duplicate_ids),
            "has_virtual_root": self.has_virtual_root,
        }

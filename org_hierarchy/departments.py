"""
Organizational Hierarchy — Department Extractor

extract_departments(root, employers) → ordered DepartmentSummary list.

Discovery:
  Depth-first pre-order from the root (or from the synthetic root's
  children). The first employer met that declares a non-empty department
  becomes that department's permanent head.

Membership:
  Each node reached from a parent is attributed to its own declared
  department if it is an employer with one, otherwise to the parent's
  resolved department, and counted if that department is already known.
  Membership therefore follows resolved departments, not strict subtree
  boundaries under the head.

Output order = discovery order.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set, Tuple

from .domain_types import DepartmentSummary, HierarchyNode
from .records import RawRecord, normalize_employers


def extract_departments(
    root: Optional[HierarchyNode],
    employers: Optional[Iterable[RawRecord]],
) -> List[DepartmentSummary]:
    if root is None:
        return []

    declared: Dict[int, str] = {}
    for rec in normalize_employers(employers):
        declared.setdefault(rec.id, rec.declared_department)

    heads: Dict[str, Tuple[int, str]] = {}
    members: Dict[str, Set[int]] = {}

    start = root.children if root.is_virtual else [root]
    stack: List[Tuple[HierarchyNode, Optional[HierarchyNode]]] = [
        (node, None) for node in reversed(start)
    ]
    while stack:
        node, parent = stack.pop()
        own = declared.get(node.id, "")

        if parent is not None:
            dept = own or parent.department
            if dept in members:
                members[dept].add(node.id)

        if own:
            if own not in heads:
                heads[own] = (node.id, node.name)
                members[own] = set()
            members[own].add(node.id)

        for child in reversed(node.children):
            stack.append((child, node))

    return [
        DepartmentSummary(
            name=name,
            head_id=head_id,
            head_name=head_name,
            employee_count=len(members[name]),
        )
        for name, (head_id, head_name) in heads.items()
    ]


def department_head_ids(departments: Iterable[DepartmentSummary]) -> Set[int]:
    return {d.head_id for d in departments}

"""
Organizational Hierarchy — Tree Builder

build_tree(employees, employers) → single rooted HierarchyNode tree.

Pipeline (pure, rebuilt from scratch on every snapshot):
  1. Normalize and merge both collections into one id-keyed map
     (employers first; a duplicate id keeps its first occurrence).
  2. Drop links that cannot become edges (missing manager, self-reference).
  3. Break manager cycles (graph.find_cycle_breaks).
  4. Link children to managers in input order.
  5. Resolve departments top-down from the roots.
  6. Return the single natural root, or wrap all roots in a synthetic one.

Every real input id appears exactly once; the result is acyclic.
Malformed references are normalized and logged, never raised.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .constants import DEFAULT_CONSTANTS
from .domain_types import BuildReport, HierarchyConstants, HierarchyNode, PersonRecord
from .graph import build_manager_map, find_cycle_breaks
from .records import RawRecord, normalize_employees, normalize_employers

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_tree(
    employees: Optional[Iterable[RawRecord]],
    employers: Optional[Iterable[RawRecord]],
    constants: HierarchyConstants | None = None,
) -> HierarchyNode:
    """Build the hierarchy and return its root (possibly synthetic)."""
    root, _report = build_tree_with_report(employees, employers, constants)
    return root


def build_tree_with_report(
    employees: Optional[Iterable[RawRecord]],
    employers: Optional[Iterable[RawRecord]],
    constants: HierarchyConstants | None = None,
) -> Tuple[HierarchyNode, BuildReport]:
    """
    Build the hierarchy and report every normalization that was applied.
    """
    constants = constants or DEFAULT_CONSTANTS
    records, duplicates = merge_records(
        normalize_employees(employees), normalize_employers(employers),
    )

    nodes: Dict[int, HierarchyNode] = {
        pid: _make_node(rec) for pid, rec in records.items()
    }

    # -- Unlinkable references --
    dangling: List[int] = []
    self_managed: List[int] = []
    for pid, rec in records.items():
        if rec.manager_id is None:
            continue
        if rec.manager_id == pid:
            self_managed.append(pid)
            logger.warning("Person %d manages themselves; treated as a root", pid)
        elif rec.manager_id not in records:
            dangling.append(pid)
            logger.warning(
                "Person %d references unknown manager %d; treated as a root",
                pid, rec.manager_id,
            )

    # -- Cycle guard --
    links = build_manager_map({pid: rec.manager_id for pid, rec in records.items()})
    breaks = find_cycle_breaks(links, records.keys())
    for pid in breaks:
        logger.warning(
            "Manager cycle detected at person %d (manager %d); link cut, "
            "person treated as a root", pid, links[pid],
        )
        del links[pid]

    # -- Linking --
    for pid, node in nodes.items():
        manager_id = links.get(pid)
        if manager_id is not None:
            nodes[manager_id].children.append(node)

    roots = [node for pid, node in nodes.items() if pid not in links]

    if constants.employers_first:
        roots.sort(key=_child_sort_key)
        for node in nodes.values():
            node.children.sort(key=_child_sort_key)

    _resolve_departments(roots, records, constants)

    if len(roots) == 1:
        root = roots[0]
    else:
        root = make_virtual_root(roots, constants)

    report = BuildReport(
        natural_root_ids=tuple(r.id for r in roots),
        cycle_break_ids=tuple(breaks),
        dangling_manager_ids=tuple(dangling),
        self_managed_ids=tuple(self_managed),
        duplicate_ids=tuple(duplicates),
        has_virtual_root=root.is_virtual,
    )
    logger.debug(
        "Built hierarchy: %d people, %d natural root(s), %d cycle break(s)",
        len(nodes), len(roots), len(breaks),
    )
    return root, report


def merge_records(
    employees: List[PersonRecord],
    employers: List[PersonRecord],
) -> Tuple[Dict[int, PersonRecord], List[int]]:
    """
    One id-keyed map over both collections, employers first.
    Returns (records, duplicate_ids). Later duplicates are dropped.
    """
    merged: Dict[int, PersonRecord] = {}
    duplicates: List[int] = []
    for rec in [*employers, *employees]:
        if rec.id in merged:
            duplicates.append(rec.id)
            logger.warning(
                "Duplicate person id %d (%s) dropped; first occurrence kept",
                rec.id, rec.kind.value,
            )
            continue
        merged[rec.id] = rec
    return merged, duplicates


def make_virtual_root(
    roots: List[HierarchyNode],
    constants: HierarchyConstants | None = None,
) -> HierarchyNode:
    """Synthetic entry point. Carries no real id meaning."""
    constants = constants or DEFAULT_CONSTANTS
    return HierarchyNode(
        id=constants.virtual_root_id,
        name=constants.virtual_root_name,
        children=list(roots),
        is_virtual=True,
    )


# ---------------------------------------------------------------------------
# Helpers (private)
# ---------------------------------------------------------------------------

def _make_node(rec: PersonRecord) -> HierarchyNode:
    return HierarchyNode(
        id=rec.id,
        name=rec.name,
        position=rec.position,
        department="",
        manager_id=rec.manager_id,
        email=rec.email,
        salary=rec.salary,
        hire_date=rec.hire_date,
        status=rec.status,
        is_employer=rec.is_employer,
    )


def _child_sort_key(node: HierarchyNode) -> Tuple[bool, str, int]:
    """Employers first, then by name, then by id."""
    return (not node.is_employer, node.name.casefold(), node.id)


def _resolve_departments(
    roots: List[HierarchyNode],
    records: Dict[int, PersonRecord],
    constants: HierarchyConstants,
) -> None:
    """
    Declared employer department wins; otherwise inherit from the tree
    parent; a root without one gets the unassigned sentinel.
    Runs after linking, so forward references are already resolved.
    """
    stack: List[Tuple[HierarchyNode, str]] = [
        (root, constants.unassigned_department) for root in reversed(roots)
    ]
    while stack:
        node, inherited = stack.pop()
        rec = records[node.id]
        declared = rec.declared_department if rec.is_employer else ""
        node.department = declared or inherited
        for child in reversed(node.children):
            stack.append((child, node.department))

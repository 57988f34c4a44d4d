"""
Organizational Hierarchy — Tree Invariant Checks

Two entry points:
  collect_tree_issues(...)  → every issue found, as readable strings
  validate_tree(...)        → hard fail on the first structural violation

Structural rules (validate_tree):
  unique_ids      no id appears twice in the tree
  coverage        tree ids == input ids (+ at most one synthetic root)
  virtual_root    a synthetic root only sits at the top, never below it
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Set

from .domain_types import HierarchyNode
from .flatten import iter_preorder
from .records import RawRecord, normalize_employees, normalize_employers


class HierarchyInvariantError(Exception):
    """Raised when a built tree violates a structural invariant."""

    def __init__(self, rule: str, detail: str) -> None:
        self.rule = rule
        self.detail = detail
        super().__init__(f"[INVARIANT:{rule}] {detail}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate_tree(
    root: Optional[HierarchyNode],
    employees: Optional[Iterable[RawRecord]] = None,
    employers: Optional[Iterable[RawRecord]] = None,
) -> None:
    """
    Raise HierarchyInvariantError on the first violation.
    Coverage is only checked when the input collections are supplied.
    """
    if root is None:
        raise HierarchyInvariantError("root", "Tree root is None")
    _check_unique_ids(root)
    _check_virtual_root(root)
    if employees is not None or employers is not None:
        _check_coverage(root, employees, employers)


def collect_tree_issues(
    root: Optional[HierarchyNode],
    employees: Optional[Iterable[RawRecord]] = None,
    employers: Optional[Iterable[RawRecord]] = None,
) -> List[str]:
    """Non-raising audit: structural violations plus unresolved manager refs."""
    if root is None:
        return ["Tree root is None"]

    issues: List[str] = []
    for check in (_check_unique_ids, _check_virtual_root):
        try:
            check(root)
        except HierarchyInvariantError as exc:
            issues.append(exc.detail)

    if employees is None and employers is None:
        return issues

    records = [*normalize_employers(employers), *normalize_employees(employees)]
    known = {r.id for r in records}
    for rec in records:
        if rec.manager_id is not None and rec.manager_id not in known:
            issues.append(
                f"Person {rec.id} ({rec.name}) has manager_id {rec.manager_id} "
                f"but that manager is not in the data"
            )

    tree_ids = {n.id for n in iter_preorder(root) if not n.is_virtual}
    for rec in records:
        if rec.id not in tree_ids:
            issues.append(f"Orphaned person: {rec.name} (id {rec.id}) is not in the tree")
    return issues


# ---------------------------------------------------------------------------
# Individual checks (private)
# ---------------------------------------------------------------------------

def _check_unique_ids(root: HierarchyNode) -> None:
    """No id twice. Also terminates on a cyclic children graph."""
    seen: Set[int] = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if node.id in seen:
            raise HierarchyInvariantError(
                "unique_ids",
                f"Node {node.id} ({node.name}) appears more than once",
            )
        seen.add(node.id)
        stack.extend(node.children)


def _check_virtual_root(root: HierarchyNode) -> None:
    for node in iter_preorder(root):
        for child in node.children:
            if child.is_virtual:
                raise HierarchyInvariantError(
                    "virtual_root",
                    f"Synthetic node {child.id} found below node {node.id}",
                )


def _check_coverage(
    root: HierarchyNode,
    employees: Optional[Iterable[RawRecord]],
    employers: Optional[Iterable[RawRecord]],
) -> None:
    expected = {r.id for r in normalize_employers(employers)}
    expected |= {r.id for r in normalize_employees(employees)}
    actual = {n.id for n in iter_preorder(root) if not n.is_virtual}

    missing = sorted(expected - actual)
    if missing:
        raise HierarchyInvariantError(
            "coverage", f"Input ids missing from the tree: {missing}",
        )
    extra = sorted(actual - expected)
    if extra:
        raise HierarchyInvariantError(
            "coverage", f"Tree contains ids not in the input: {extra}",
        )

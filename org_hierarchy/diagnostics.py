"""
Organizational Hierarchy — Diagnostics

Summarise a built tree for logs, the HTTP adapter, and debugging.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .domain_types import BuildReport, DepartmentSummary, HierarchyNode


def compute_diagnostics(
    root: Optional[HierarchyNode],
    report: BuildReport | None = None,
    departments: Sequence[DepartmentSummary] = (),
) -> dict:
    """
    Return a diagnostic dict summarising hierarchy health.
    max_depth counts people only (a synthetic root adds no level).
    """
    report = report or BuildReport()
    node_count = 0
    person_count = 0
    max_depth = 0

    if root is not None:
        base = -1 if root.is_virtual else 0
        stack = [(root, base)]
        while stack:
            node, depth = stack.pop()
            node_count += 1
            if not node.is_virtual:
                person_count += 1
                max_depth = max(max_depth, depth + 1)
            for child in node.children:
                stack.append((child, depth + 1))

    warnings: List[str] = []
    if report.cycle_break_ids:
        warnings.append(
            f"{len(report.cycle_break_ids)} manager cycle(s) broken at: "
            f"{', '.join(str(i) for i in report.cycle_break_ids)}"
        )
    if report.dangling_manager_ids:
        warnings.append(
            f"{len(report.dangling_manager_ids)} person(s) reference unknown managers: "
            f"{', '.join(str(i) for i in report.dangling_manager_ids)}"
        )
    if report.self_managed_ids:
        warnings.append(
            f"{len(report.self_managed_ids)} person(s) list themselves as manager: "
            f"{', '.join(str(i) for i in report.self_managed_ids)}"
        )
    if report.duplicate_ids:
        warnings.append(
            f"{len(report.duplicate_ids)} duplicate id(s) dropped: "
            f"{', '.join(str(i) for i in report.duplicate_ids)}"
        )
    if person_count and not departments:
        warnings.append("No employer declares a department")

    return {
        "node_count": node_count,
        "person_count": person_count,
        "root_count": len(report.natural_root_ids),
        "has_virtual_root": bool(root is not None and root.is_virtual),
        "max_depth": max_depth,
        "department_count": len(departments),
        "cycle_breaks": list(report.cycle_break_ids),
        "dangling_manager_ids": list(report.dangling_manager_ids),
        "self_managed_ids": list(report.self_managed_ids),
        "warnings": warnings,
    }


def format_tree(root: Optional[HierarchyNode]) -> str:
    """Box-drawing text rendering, one person per line."""
    if root is None:
        return "Tree is empty"

    lines: List[str] = []
    stack = [(root, "", True, True)]
    while stack:
        node, indent, is_last, is_top = stack.pop()
        marker = "" if is_top else ("└── " if is_last else "├── ")
        label = "(organization)" if node.is_virtual else node.name
        manager = node.manager_id if node.manager_id is not None else "None"
        lines.append(
            f"{indent}{marker}{label} (ID: {node.id}, Position: {node.position}, "
            f"Department: {node.department}, ManagerID: {manager})"
        )
        child_indent = indent if is_top else indent + ("    " if is_last else "│   ")
        count = len(node.children)
        for i in reversed(range(count)):
            stack.append((node.children[i], child_indent, i == count - 1, False))
    return "\n".join(lines)

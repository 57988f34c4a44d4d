"""
Organizational Hierarchy Engine
Deterministic, in-memory derivation of an org chart from flat
employee/employer snapshots, plus department grid / drill-down navigation.
"""

from .domain_types import (
    PersonKind, ViewMode, HierarchyConstants, PersonRecord, HierarchyNode,
    DepartmentSummary, NavigationState, BuildReport,
)
from .records import (
    RecordError,
    normalize_employee,
    normalize_employer,
    normalize_employees,
    normalize_employers,
)
from .tree_builder import build_tree, build_tree_with_report, merge_records
from .flatten import (
    FlatIndex,
    build_index,
    flatten_tree,
    find_node_by_id,
    get_path_to_node,
)
from .departments import extract_departments
from .navigation import NavigationController
from .invariants import HierarchyInvariantError, validate_tree, collect_tree_issues
from .diagnostics import compute_diagnostics, format_tree
from .hashing import canonical_serialize, snapshot_hash
from .session import HierarchySession
from .constants import (
    DEFAULT_CONSTANTS,
    UNASSIGNED_DEPARTMENT,
    VIRTUAL_ROOT_ID,
)

__all__ = [
    "PersonKind",
    "ViewMode",
    "HierarchyConstants",
    "PersonRecord",
    "HierarchyNode",
    "DepartmentSummary",
    "NavigationState",
    "BuildReport",
    "RecordError",
    "normalize_employee",
    "normalize_employer",
    "normalize_employees",
    "normalize_employers",
    "build_tree",
    "build_tree_with_report",
    "merge_records",
    "FlatIndex",
    "build_index",
    "flatten_tree",
    "find_node_by_id",
    "get_path_to_node",
    "extract_departments",
    "NavigationController",
    "HierarchyInvariantError",
    "validate_tree",
    "collect_tree_issues",
    "compute_diagnostics",
    "format_tree",
    "canonical_serialize",
    "snapshot_hash",
    "HierarchySession",
    "DEFAULT_CONSTANTS",
    "UNASSIGNED_DEPARTMENT",
    "VIRTUAL_ROOT_ID",
]

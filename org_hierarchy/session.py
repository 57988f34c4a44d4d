"""
Organizational Hierarchy — Session

Stateful wrapper around the pure layers for one viewer:

  load_snapshot(employees, employers)
    1. fingerprint the snapshot (hashing.snapshot_hash)
    2. unchanged → keep everything as is
    3. changed   → build tree, index, departments, diagnostics from
                   scratch, then rebind navigation state by id

The previous tree is discarded outright; only ids carry over.
Manual expand/collapse toggles live here, not in the controller.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set

from .constants import DEFAULT_CONSTANTS
from .departments import extract_departments
from .diagnostics import compute_diagnostics, format_tree
from .domain_types import (
    BuildReport,
    DepartmentSummary,
    HierarchyConstants,
    HierarchyNode,
    NavigationState,
)
from .flatten import FlatIndex
from .hashing import snapshot_hash
from .navigation import NavigationController
from .records import RawRecord, normalize_employees, normalize_employers
from .tree_builder import build_tree_with_report

logger = logging.getLogger(__name__)


class HierarchySession:
    """
    One viewer's context: current snapshot products + navigation state.

    Until the first load_snapshot the tree is None and every action is a
    no-op that returns the (initial) navigation state.
    """

    def __init__(self, constants: HierarchyConstants | None = None) -> None:
        self._constants = constants or DEFAULT_CONSTANTS
        self._snapshot_hash: str = ""
        self._root: Optional[HierarchyNode] = None
        self._index = FlatIndex(None)
        self._departments: List[DepartmentSummary] = []
        self._report = BuildReport()
        self._diagnostics: dict = compute_diagnostics(None)
        self._navigation = NavigationController()
        self._manual_expanded: Set[int] = set()

    # -- Snapshot -----------------------------------------------------------

    def load_snapshot(
        self,
        employees: Optional[Iterable[RawRecord]],
        employers: Optional[Iterable[RawRecord]],
    ) -> bool:
        """
        Replace the current snapshot. Returns True if a rebuild happened.
        Raises RecordError for records without a usable id; the previous
        snapshot stays in place in that case.
        """
        employee_records = normalize_employees(employees)
        employer_records = normalize_employers(employers)

        digest = snapshot_hash(employee_records, employer_records)
        if self._root is not None and digest == self._snapshot_hash:
            logger.debug("Snapshot %s unchanged; rebuild skipped", digest[:12])
            return False

        root, report = build_tree_with_report(
            employee_records, employer_records, self._constants,
        )
        index = FlatIndex(root)
        departments = extract_departments(root, employer_records)

        self._root = root
        self._index = index
        self._report = report
        self._departments = departments
        self._diagnostics = compute_diagnostics(root, report, departments)
        self._snapshot_hash = digest
        self._navigation.rebind(root, index, departments)
        self._manual_expanded &= {n.id for n in index.nodes}

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Hierarchy:\n%s", format_tree(root))

        logger.info(
            "Loaded snapshot %s: %d people, %d department(s)",
            digest[:12], self._diagnostics["person_count"], len(departments),
        )
        return True

    # -- Products -----------------------------------------------------------

    @property
    def snapshot_hash(self) -> str:
        return self._snapshot_hash

    @property
    def root(self) -> Optional[HierarchyNode]:
        return self._root

    @property
    def index(self) -> FlatIndex:
        return self._index

    @property
    def nodes(self) -> List[HierarchyNode]:
        return self._index.nodes

    @property
    def departments(self) -> List[DepartmentSummary]:
        return list(self._departments)

    @property
    def report(self) -> BuildReport:
        return self._report

    @property
    def diagnostics(self) -> dict:
        return dict(self._diagnostics)

    @property
    def state(self) -> NavigationState:
        return self._navigation.state

    @property
    def manual_expanded(self) -> frozenset:
        return frozenset(self._manual_expanded)

    # -- Actions ------------------------------------------------------------

    def open_department(self, head_id: int) -> NavigationState:
        return self._navigation.open_department(head_id)

    def reset_view(self) -> NavigationState:
        return self._navigation.reset_view()

    def handle_search(self, query: str) -> NavigationState:
        return self._navigation.handle_search(query)

    def focus_person(self, person_id: int) -> NavigationState:
        return self._navigation.focus_node(person_id)

    def toggle_node(self, node_id: int) -> bool:
        """Flip a manual toggle. Returns the new manual state; unknown ids stay closed."""
        if node_id not in self._index:
            logger.warning("toggle_node: unknown id %r ignored", node_id)
            return False
        if node_id in self._manual_expanded:
            self._manual_expanded.discard(node_id)
            return False
        self._manual_expanded.add(node_id)
        return True

    def is_node_expanded(self, node_id: int) -> bool:
        return self._navigation.is_node_expanded(node_id, self._manual_expanded)

    def expanded_ids(self) -> List[int]:
        """Every id the renderer should draw open, in flatten order."""
        return [n.id for n in self._index.nodes if self.is_node_expanded(n.id)]

    def find_person(self, person_id: int) -> Optional[HierarchyNode]:
        node = self._index.get(person_id)
        return None if node is None or node.is_virtual else node

    def find_manager(self, person_id: int) -> Optional[HierarchyNode]:
        return self._index.manager_of(person_id)

    # -- Serialisation ------------------------------------------------------

    def to_dict(self, include_tree: bool = False) -> dict:
        """Plain-dict view for the rendering collaborator."""
        out = {
            "snapshot_hash": self._snapshot_hash,
            "navigation": self.state.to_dict(),
            "departments": [d.to_dict() for d in self._departments],
            "expanded_ids": self.expanded_ids(),
            "manual_expanded": sorted(self._manual_expanded),
            "diagnostics": self.diagnostics,
        }
        current = self.state.current_root
        out["current_root"] = current.to_dict() if current is not None else None
        if include_tree:
            out["tree"] = self._root.to_dict() if self._root is not None else None
        return out

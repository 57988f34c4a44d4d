"""
Organizational Hierarchy — Navigation Controller

Two-state machine layered over a built tree:

  MACRO_GRID  (initial)  — department overview grid
  MICRO_TREE             — drill-down into one subtree

Transitions:
  open_department(head_id)  MACRO_GRID|MICRO_TREE → MICRO_TREE
  reset_view()              any → MACRO_GRID
  handle_search(query)      relocates + highlights the first match,
                            switching to MICRO_TREE when needed
  focus_node(node_id)       same as a search hit on a known id

State is an immutable NavigationState replaced on every transition.
Stale ids (after a rebuild) fail closed; nothing here raises.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Collection, FrozenSet, Iterable, List, Optional

from .departments import department_head_ids
from .domain_types import DepartmentSummary, HierarchyNode, NavigationState, ViewMode
from .flatten import FlatIndex, build_index

logger = logging.getLogger(__name__)


class NavigationController:
    """
    Owns the navigation state for one tree at a time.

    Manual expand/collapse toggles are not stored here; callers pass their
    own set to is_node_expanded, which unions it with the search path.
    """

    def __init__(
        self,
        root: Optional[HierarchyNode] = None,
        index: Optional[FlatIndex] = None,
        departments: Iterable[DepartmentSummary] = (),
    ) -> None:
        self._state = NavigationState()
        self._root: Optional[HierarchyNode] = None
        self._index = FlatIndex(None)
        self._head_ids: FrozenSet[int] = frozenset()
        self.rebind(root, index, departments)

    # -- State access -------------------------------------------------------

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def root(self) -> Optional[HierarchyNode]:
        return self._root

    # -- Rebuild ------------------------------------------------------------

    def rebind(
        self,
        root: Optional[HierarchyNode],
        index: Optional[FlatIndex] = None,
        departments: Iterable[DepartmentSummary] = (),
    ) -> NavigationState:
        """
        Point the controller at a freshly built tree and carry the current
        state over by id. Ids that no longer exist degrade to MACRO_GRID
        and/or a cleared highlight.
        """
        self._root = root
        self._index = index if index is not None else build_index(root)
        self._head_ids = frozenset(department_head_ids(departments))

        prev = self._state
        view_mode = prev.view_mode
        current = None
        if prev.current_root is not None:
            current = self._index.get(prev.current_root.id)
            if current is None:
                logger.warning(
                    "Drill-down root %d no longer exists; returning to grid",
                    prev.current_root.id,
                )
        if current is None:
            view_mode = ViewMode.MACRO_GRID

        highlight = prev.search_highlight
        if highlight is not None and highlight not in self._index:
            logger.warning("Search highlight %d no longer exists; cleared", highlight)
            highlight = None

        if (
            highlight is not None
            and current is not None
            and not self._index.is_descendant_or_self(highlight, current.id)
        ):
            # Highlight moved out of the drill-down branch; follow it.
            logger.info(
                "Search highlight %d left drill-down root %d; re-anchored",
                highlight, current.id,
            )
            current = self._anchor_for(self._index.get(highlight))

        self._state = NavigationState(
            view_mode=view_mode,
            current_root=current,
            search_highlight=highlight,
            expanded_path=self._path_to(highlight) if highlight is not None else frozenset(),
        )
        return self._state

    # -- Transitions --------------------------------------------------------

    def open_department(self, head_id: int) -> NavigationState:
        """Drill into head_id's subtree. Unknown ids leave the view mode alone."""
        node = self._index.get(head_id)
        if node is None:
            logger.warning("open_department: unknown id %r ignored", head_id)
            return self._state

        highlight = self._state.search_highlight
        path = self._state.expanded_path
        if highlight is not None and not self._index.is_descendant_or_self(highlight, node.id):
            highlight = None
            path = frozenset()

        self._state = NavigationState(
            view_mode=ViewMode.MICRO_TREE,
            current_root=node,
            search_highlight=highlight,
            expanded_path=path,
        )
        return self._state

    def reset_view(self) -> NavigationState:
        self._state = NavigationState()
        return self._state

    def handle_search(self, query: str) -> NavigationState:
        """
        Case-insensitive substring search over name or position, scanned
        in flatten order. First hit wins.

        A blank query clears the search and returns to the grid.
        No hit: only the highlight is cleared.
        """
        needle = (query or "").strip().casefold()
        if not needle:
            return self.reset_view()

        match = self.find_match(needle)
        if match is None:
            logger.debug("Search %r: no match", query)
            self._state = replace(self._state, search_highlight=None)
            return self._state
        return self._highlight(match)

    def focus_node(self, node_id: int) -> NavigationState:
        """Highlight a specific person (deep link). Unknown ids clear the highlight."""
        node = self._index.get(node_id)
        if node is None or node.is_virtual:
            logger.warning("focus_node: unknown id %r", node_id)
            self._state = replace(self._state, search_highlight=None)
            return self._state
        return self._highlight(node)

    # -- Queries ------------------------------------------------------------

    def find_match(self, query: str) -> Optional[HierarchyNode]:
        needle = query.strip().casefold()
        if not needle:
            return None
        for node in self._index.nodes:
            if node.is_virtual:
                continue
            if needle in node.name.casefold() or needle in node.position.casefold():
                return node
        return None

    def is_node_expanded(self, node_id: int, manual: Collection[int] = ()) -> bool:
        """
        Render-time union of manual toggles and the search path.
        A synthetic root has no card of its own and is always open.
        """
        if node_id in manual or node_id in self._state.expanded_path:
            return True
        return self._root is not None and self._root.is_virtual and node_id == self._root.id

    # -- Helpers (private) --------------------------------------------------

    def _highlight(self, node: HierarchyNode) -> NavigationState:
        view_mode = self._state.view_mode
        current = self._state.current_root
        if (
            view_mode is ViewMode.MACRO_GRID
            or current is None
            or not self._index.is_descendant_or_self(node.id, current.id)
        ):
            current = self._anchor_for(node)
            view_mode = ViewMode.MICRO_TREE

        self._state = NavigationState(
            view_mode=view_mode,
            current_root=current,
            search_highlight=node.id,
            expanded_path=self._path_to(node.id),
        )
        return self._state

    def _path_to(self, node_id: int) -> FrozenSet[int]:
        """Ancestors of node_id, synthetic root excluded."""
        return frozenset(
            a for a in self._index.ancestors(node_id)
            if not self._index.get(a).is_virtual
        )

    def _anchor_for(self, node: HierarchyNode) -> Optional[HierarchyNode]:
        """Top-most department head on the chain (node included), else the root."""
        chain: List[int] = [node.id] + self._index.ancestors(node.id)
        for candidate in reversed(chain):
            if candidate in self._head_ids:
                return self._index.get(candidate)
        return self._root

"""
Organizational Hierarchy — Tree Flattener

flatten_tree(root) → every node exactly once, deterministic pre-order.
build_index(root)  → FlatIndex with O(1) id / parent lookups.

Never mutates the tree.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from .domain_types import HierarchyNode


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def iter_preorder(root: Optional[HierarchyNode]) -> Iterator[HierarchyNode]:
    """Pre-order, children left to right. Iterative (no recursion limit)."""
    if root is None:
        return
    stack: List[HierarchyNode] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def flatten_tree(root: Optional[HierarchyNode]) -> List[HierarchyNode]:
    """All nodes, synthetic root included, in pre-order."""
    return list(iter_preorder(root))


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------

class FlatIndex:
    """
    Id-indexed flat view of one built tree.

    Built once per rebuild in O(n); every lookup afterwards is O(1)
    (ancestors is O(depth)). Parent links come from the tree itself,
    so a cut cycle link never reappears here.
    """

    def __init__(self, root: Optional[HierarchyNode]) -> None:
        self._root = root
        self._nodes: List[HierarchyNode] = []
        self._by_id: Dict[int, HierarchyNode] = {}
        self._parent_of: Dict[int, int] = {}

        if root is None:
            return
        stack: List[HierarchyNode] = [root]
        while stack:
            node = stack.pop()
            self._nodes.append(node)
            self._by_id[node.id] = node
            for child in node.children:
                self._parent_of[child.id] = node.id
            stack.extend(reversed(node.children))

    # -- Access -------------------------------------------------------------

    @property
    def root(self) -> Optional[HierarchyNode]:
        return self._root

    @property
    def nodes(self) -> List[HierarchyNode]:
        """Flatten order. Do not mutate."""
        return self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._by_id

    def get(self, node_id: Optional[int]) -> Optional[HierarchyNode]:
        if node_id is None:
            return None
        return self._by_id.get(node_id)

    def parent_of(self, node_id: int) -> Optional[HierarchyNode]:
        """Tree parent (the manager for every linked node)."""
        parent_id = self._parent_of.get(node_id)
        return None if parent_id is None else self._by_id[parent_id]

    def manager_of(self, node_id: int) -> Optional[HierarchyNode]:
        """The node's manager, if that link is part of the tree."""
        parent = self.parent_of(node_id)
        if parent is None or parent.is_virtual:
            return None
        return parent

    def ancestors(self, node_id: int) -> List[int]:
        """Parent first, tree root last. Empty for the root or unknown ids."""
        chain: List[int] = []
        parent_id = self._parent_of.get(node_id)
        while parent_id is not None:
            chain.append(parent_id)
            parent_id = self._parent_of.get(parent_id)
        return chain

    def is_descendant_or_self(self, node_id: int, ancestor_id: int) -> bool:
        if node_id == ancestor_id:
            return node_id in self._by_id
        return ancestor_id in self.ancestors(node_id)


def build_index(root: Optional[HierarchyNode]) -> FlatIndex:
    return FlatIndex(root)


# ---------------------------------------------------------------------------
# Tree-walk helpers
# ---------------------------------------------------------------------------

def find_node_by_id(
    root: Optional[HierarchyNode], node_id: int,
) -> Optional[HierarchyNode]:
    """Linear search without an index. Prefer FlatIndex.get for repeats."""
    for node in iter_preorder(root):
        if node.id == node_id:
            return node
    return None


def get_path_to_node(
    root: Optional[HierarchyNode], node_id: int,
) -> Optional[List[int]]:
    """Ids from root down to node_id inclusive, or None if absent."""
    if root is None:
        return None
    stack: List[tuple[HierarchyNode, List[int]]] = [(root, [root.id])]
    while stack:
        node, path = stack.pop()
        if node.id == node_id:
            return path
        for child in reversed(node.children):
            stack.append((child, path + [child.id]))
    return None

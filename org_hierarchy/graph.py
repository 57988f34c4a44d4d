"""
Organizational Hierarchy — Manager Graph Utilities

Pure dict-based analysis of the manager relation before linking.
The relation is functional (each person has at most one manager), so a
walk from any node follows a single chain.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional


# ---------------------------------------------------------------------------
# Manager relation
# ---------------------------------------------------------------------------

def build_manager_map(
    manager_of: Dict[int, Optional[int]],
) -> Dict[int, int]:
    """
    Keep only links that can become tree edges: manager present in the
    map and distinct from the person.
    """
    return {
        pid: mid
        for pid, mid in manager_of.items()
        if mid is not None and mid != pid and mid in manager_of
    }


# ---------------------------------------------------------------------------
# Cycle breaking
# ---------------------------------------------------------------------------

def find_cycle_breaks(
    links: Dict[int, int],
    order: Iterable[int],
) -> List[int]:
    """
    Return the ids whose outgoing manager link must be cut so that the
    remaining links form a forest. Exactly one id per cycle.

    Walks each chain in ``order`` with explicit colour tracking. When a
    walk re-enters a node already on the current path, that node is the
    point of detection and is cut; the rest of the cycle stays linked
    beneath it.
    """
    WHITE, GREY, BLACK = 0, 1, 2
    colour: Dict[int, int] = {}
    breaks: List[int] = []

    for start in order:
        if colour.get(start, WHITE) != WHITE:
            continue
        path: List[int] = []
        node: Optional[int] = start
        while node is not None and colour.get(node, WHITE) == WHITE:
            colour[node] = GREY
            path.append(node)
            node = links.get(node)
        if node is not None and colour.get(node) == GREY:
            breaks.append(node)
        for visited in path:
            colour[visited] = BLACK

    return breaks


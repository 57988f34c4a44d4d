"""
Verification Harness — Generate, build, and verify synthetic snapshots.
"""

from __future__ import annotations

from org_hierarchy.invariants import validate_tree
from org_hierarchy.session import HierarchySession

from .compiler import generate_snapshot
from .snapshot_spec import SnapshotSpec


def verify_generated_snapshot(spec: SnapshotSpec, seed: int) -> dict:
    """
    Generate a snapshot, load it into a fresh session, validate the tree
    against the input, and return a summary.

    Raises HierarchyInvariantError if the built tree is inconsistent.

    Returns:
        {
            "snapshot_hash": str,
            "diagnostics": dict,
            "person_count": int,
            "department_count": int,
        }
    """
    snap = generate_snapshot(spec, seed)

    session = HierarchySession()
    session.load_snapshot(snap.employees, snap.employers)
    validate_tree(session.root, snap.employees, snap.employers)

    diagnostics = session.diagnostics
    return {
        "snapshot_hash": session.snapshot_hash,
        "diagnostics": diagnostics,
        "person_count": diagnostics["person_count"],
        "department_count": len(session.departments),
    }

"""
JSON Snapshot Exporter.

Exports a generated snapshot + metadata to a JSON file that the HTTP
adapter's POST /hierarchy accepts as-is (plus a "metadata" key).
"""

from __future__ import annotations

import json

from org_hierarchy.hashing import snapshot_hash

from .compiler import Snapshot
from .snapshot_spec import SnapshotSpec


def export_snapshot(
    snapshot: Snapshot,
    path: str,
    spec: SnapshotSpec,
    seed: int,
) -> None:
    """
    Write snapshot + metadata to a JSON file.

    Output format:
    {
        "metadata": {"seed": int, "spec": {...}, "snapshot_hash": str},
        "employees": [...],
        "employers": [...]
    }
    """
    doc = {
        "metadata": {
            "seed": seed,
            "spec": spec.to_dict(),
            "snapshot_hash": snapshot_hash(snapshot.employees, snapshot.employers),
        },
        **snapshot.to_dict(),
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(doc, f, ensure_ascii=True, indent=2)

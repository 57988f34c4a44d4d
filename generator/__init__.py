"""
Deterministic Snapshot Generator.

Produces reproducible employee/employer snapshots for the hierarchy engine.
"""

from .compiler import generate_snapshot, GeneratorSpecError, Snapshot
from .deterministic_rng import DeterministicRNG
from .exporter import export_snapshot
from .snapshot_spec import SnapshotSpec
from .verification import verify_generated_snapshot

__all__ = [
    "generate_snapshot",
    "GeneratorSpecError",
    "Snapshot",
    "DeterministicRNG",
    "export_snapshot",
    "SnapshotSpec",
    "verify_generated_snapshot",
]

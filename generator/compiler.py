"""
Snapshot Compiler — Deterministic generator producing person snapshots.

generate_snapshot(spec, seed) → Snapshot(employees, employers)

Records are camelCase dicts shaped like the HR API's responses, so they
flow through the same normalization as real data. Optional faults
(dangling managers, self references, manager cycles) exercise the
builder's normalization paths.

No global randomness. Ids are sequential from 1.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .deterministic_rng import DeterministicRNG
from .department_templates import (
    DEPARTMENT_BLUEPRINTS,
    EXECUTIVE_DEPARTMENT,
    EXECUTIVE_TITLES,
    FIRST_NAMES,
    LAST_NAMES,
    DeptBlueprint,
)
from .snapshot_spec import SnapshotSpec


class GeneratorSpecError(ValueError):
    """Raised when a SnapshotSpec cannot be generated."""


@dataclass
class Snapshot:
    """One generated (employees, employers) pair."""

    employees: List[Dict[str, Any]] = field(default_factory=list)
    employers: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def all_ids(self) -> List[int]:
        return [r["id"] for r in self.employers] + [r["id"] for r in self.employees]

    def to_dict(self) -> dict:
        return {"employees": list(self.employees), "employers": list(self.employers)}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def generate_snapshot(spec: SnapshotSpec, seed: int) -> Snapshot:
    """Compile a SnapshotSpec + seed into a deterministic snapshot."""
    _check_spec(spec)
    rng = DeterministicRNG(seed)
    snap = Snapshot()
    next_id = 0

    def _next_id() -> int:
        nonlocal next_id
        next_id += 1
        return next_id

    # ── Step 1: Executives ────────────────────────────────────────────
    executives: List[int] = []
    for i in range(spec.top_level_employers):
        pid = _next_id()
        snap.employers.append(_employer(
            rng, pid, EXECUTIVE_TITLES[i % len(EXECUTIVE_TITLES)],
            EXECUTIVE_DEPARTMENT, None,
        ))
        executives.append(pid)

    # ── Step 2: Department employers ──────────────────────────────────
    blueprints = DEPARTMENT_BLUEPRINTS[:spec.department_count]
    dept_managers: List[List[int]] = []
    for bp in blueprints:
        head_id = _next_id()
        head_manager = rng.rand_choice(executives) if executives else None
        snap.employers.append(_employer(rng, head_id, bp.head_title, bp.name, head_manager))
        managers = [head_id]
        for _ in range(spec.employers_per_department - 1):
            pid = _next_id()
            dept = "" if rng.rand_percent(spec.undeclared_employer_percent) else bp.name
            snap.employers.append(_employer(
                rng, pid, rng.rand_choice(bp.lead_titles), dept, head_id,
            ))
            managers.append(pid)
        dept_managers.append(managers)

    # ── Step 3: Employees ─────────────────────────────────────────────
    max_known_id = spec.top_level_employers + len(blueprints) * spec.employers_per_department
    max_known_id += spec.employee_count + 3 * spec.cycle_count
    for _ in range(spec.employee_count):
        pid = _next_id()
        slot = rng.rand_int(0, len(blueprints) - 1)
        bp = blueprints[slot]
        if rng.rand_percent(spec.dangling_manager_percent):
            manager_id: Optional[int] = max_known_id + 1000 + pid
        else:
            manager_id = rng.rand_choice(dept_managers[slot])
        snap.employees.append(_employee(rng, pid, bp, manager_id))
        # Employees can lead others in the same department.
        if rng.rand_percent(30):
            dept_managers[slot].append(pid)

    # ── Step 4: Self references ───────────────────────────────────────
    for rec in rng.sample(snap.employees, spec.self_manager_count):
        rec["managerId"] = rec["id"]

    # ── Step 5: Manager cycles ────────────────────────────────────────
    for _ in range(spec.cycle_count):
        bp = rng.rand_choice(blueprints)
        size = rng.rand_int(2, 3)
        ring = [_next_id() for _ in range(size)]
        for i, pid in enumerate(ring):
            snap.employees.append(_employee(rng, pid, bp, ring[(i + 1) % size]))

    return snap


# ---------------------------------------------------------------------------
# Helpers (private)
# ---------------------------------------------------------------------------

def _check_spec(spec: SnapshotSpec) -> None:
    if not 1 <= spec.department_count <= len(DEPARTMENT_BLUEPRINTS):
        raise GeneratorSpecError(
            f"department_count must be 1..{len(DEPARTMENT_BLUEPRINTS)}, "
            f"got {spec.department_count}"
        )
    if spec.employers_per_department < 1:
        raise GeneratorSpecError("employers_per_department must be >= 1")
    for name in ("undeclared_employer_percent", "dangling_manager_percent"):
        value = getattr(spec, name)
        if not 0 <= value <= 100:
            raise GeneratorSpecError(f"{name} must be 0..100, got {value}")
    if spec.self_manager_count > spec.employee_count:
        raise GeneratorSpecError("self_manager_count exceeds employee_count")
    if min(spec.employee_count, spec.top_level_employers, spec.cycle_count) < 0:
        raise GeneratorSpecError("counts must be non-negative")


def _name(rng: DeterministicRNG) -> str:
    return f"{rng.rand_choice(FIRST_NAMES)} {rng.rand_choice(LAST_NAMES)}"


def _common(rng: DeterministicRNG, pid: int, name: str) -> Dict[str, Any]:
    return {
        "id": pid,
        "name": name,
        "email": f"{name.lower().replace(' ', '.')}.{pid}@example.com",
        "status": "ACTIVE",
        "salary": rng.rand_int(40, 250) * 1000,
        "hireDate": f"20{rng.rand_int(10, 25):02d}-{rng.rand_int(1, 12):02d}-{rng.rand_int(1, 28):02d}",
    }


def _employer(
    rng: DeterministicRNG,
    pid: int,
    title: str,
    department: str,
    manager_id: Optional[int],
) -> Dict[str, Any]:
    rec = _common(rng, pid, _name(rng))
    rec.update({"title": title, "department": department, "managerId": manager_id})
    return rec


def _employee(
    rng: DeterministicRNG,
    pid: int,
    bp: DeptBlueprint,
    manager_id: Optional[int],
) -> Dict[str, Any]:
    rec = _common(rng, pid, _name(rng))
    rec.update({"position": rng.rand_choice(bp.staff_positions), "managerId": manager_id})
    return rec

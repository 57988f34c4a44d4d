"""
Organizational Hierarchy — Canonical Snapshot Hashing

Deterministic canonical serialization + SHA-256 of one
(employees, employers) snapshot. Used to skip rebuilds when a refetch
returns identical data.

Rules:
  - Records normalized first (camelCase and snake_case hash the same)
  - Input order kept (it decides child order when sorting is off)
  - Fixed field order, UTF-8 JSON, no whitespace
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, Iterable, List, Optional

from .domain_types import PersonRecord
from .records import RawRecord, normalize_employees, normalize_employers


def canonical_serialize(
    employees: Optional[Iterable[RawRecord]],
    employers: Optional[Iterable[RawRecord]],
) -> bytes:
    obj = {
        "employees": _records(normalize_employees(employees)),
        "employers": _records(normalize_employers(employers)),
    }
    return json.dumps(obj, ensure_ascii=True, separators=(",", ":"), sort_keys=False).encode("utf-8")


def snapshot_hash(
    employees: Optional[Iterable[RawRecord]],
    employers: Optional[Iterable[RawRecord]],
) -> str:
    """SHA-256 of canonical serialization. Lowercase hex string."""
    return hashlib.sha256(canonical_serialize(employees, employers)).hexdigest()


def _records(records: List[PersonRecord]) -> List[Dict[str, Any]]:
    return [
        {
            "id": r.id,
            "name": r.name,
            "manager_id": r.manager_id,
            "position": r.position,
            "department": r.declared_department,
            "email": r.email,
            "salary": r.salary,
            "hire_date": r.hire_date,
            "status": r.status,
        }
        for r in records
    ]

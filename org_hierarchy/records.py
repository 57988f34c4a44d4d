"""
Organizational Hierarchy — Record Normalization

Turns raw person payloads (camelCase or snake_case dicts, or existing
PersonRecord instances) into immutable PersonRecords.

Only an unusable id is an error. Everything else is normalized:
blank strings become "", a falsy managerId means "no manager".
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from .domain_types import PersonKind, PersonRecord

logger = logging.getLogger(__name__)

RawRecord = Union[Mapping[str, Any], PersonRecord]


class RecordError(ValueError):
    """Raised when a raw record cannot be interpreted at all."""

    def __init__(self, field: str, value: Any, detail: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} {value!r}: {detail}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize_employee(raw: RawRecord) -> PersonRecord:
    """Normalize one employee payload. Position falls back to title."""
    return _normalize(raw, PersonKind.EMPLOYEE)


def normalize_employer(raw: RawRecord) -> PersonRecord:
    """Normalize one employer payload. Title falls back to position."""
    return _normalize(raw, PersonKind.EMPLOYER)


def normalize_employees(raws: Optional[Iterable[RawRecord]]) -> List[PersonRecord]:
    return [normalize_employee(r) for r in (raws or [])]


def normalize_employers(raws: Optional[Iterable[RawRecord]]) -> List[PersonRecord]:
    return [normalize_employer(r) for r in (raws or [])]


# ---------------------------------------------------------------------------
# Helpers (private)
# ---------------------------------------------------------------------------

def _normalize(raw: RawRecord, kind: PersonKind) -> PersonRecord:
    if isinstance(raw, PersonRecord):
        if raw.kind is not kind:
            raise RecordError(
                "kind", raw.kind.value,
                f"record {raw.id} supplied as {kind.value}",
            )
        return raw

    if not isinstance(raw, Mapping):
        raise RecordError("record", raw, "expected a mapping")

    person_id = _coerce_id(_pick(raw, "id"))
    if person_id is None:
        raise RecordError("id", _pick(raw, "id"), "a positive integer id is required")

    manager_raw = _pick(raw, "managerId", "manager_id")
    try:
        manager_id = _coerce_id(manager_raw)
    except RecordError:
        logger.warning(
            "Record %d: unparseable managerId %r treated as no manager",
            person_id, manager_raw,
        )
        manager_id = None

    if kind is PersonKind.EMPLOYER:
        position = _text(_pick(raw, "title", "position"))
        department = _text(_pick(raw, "department"))
    else:
        position = _text(_pick(raw, "position", "title"))
        department = ""

    return PersonRecord(
        id=person_id,
        name=_text(_pick(raw, "name")),
        kind=kind,
        manager_id=manager_id,
        position=position,
        declared_department=department,
        email=_text(_pick(raw, "email")),
        salary=_coerce_salary(_pick(raw, "salary")),
        hire_date=_text(_pick(raw, "hireDate", "hire_date")),
        status=_text(_pick(raw, "status")),
    )


def _pick(raw: Mapping[str, Any], *keys: str) -> Any:
    """First non-None value among keys."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _coerce_id(value: Any) -> Optional[int]:
    """
    None, "", 0 → None (absent). Positive integers (or digit strings) → int.
    Anything else raises RecordError.
    """
    if value is None or value == "" or value == 0:
        return None
    if isinstance(value, bool):
        raise RecordError("id", value, "booleans are not ids")
    if isinstance(value, int):
        result = value
    elif isinstance(value, float) and value.is_integer():
        result = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        result = int(value.strip())
    else:
        raise RecordError("id", value, "must be a positive integer")
    if result <= 0:
        raise RecordError("id", value, "must be a positive integer")
    return result


def _coerce_salary(value: Any) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()

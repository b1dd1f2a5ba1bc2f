"""Snapshot merge: roster + persisted sparse records + unsaved local rows.

The result always has one row per roster entry, in roster order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Iterable, Mapping, Optional, Sequence, Union

from ..core.constants import TIMESHEET_FIELDS

KeySpec = Union[str, Callable[[Any], Hashable]]


def _key_of(item: Any, key: KeySpec) -> Hashable:
    if callable(key):
        return key(item)
    if isinstance(item, Mapping):
        return item.get(key)
    return getattr(item, key)


def index_by(records: Iterable[Any], key: KeySpec) -> dict:
    """Map records by business key; the last record wins on duplicates."""
    out: dict = {}
    for record in records:
        out[_key_of(record, key)] = record
    return out


def _merge_persisted(resource: Mapping[str, Any], record: Mapping[str, Any], fields: Sequence[str]) -> dict:
    row = dict(resource)
    row.update(record)
    for name in fields:
        value = record.get(name)
        row[name] = "" if value is None else value
    return row


def merge_snapshot(
    roster: Sequence[Mapping[str, Any]],
    persisted: Mapping[Hashable, Mapping[str, Any]],
    prior: Optional[Mapping[Hashable, Mapping[str, Any]]] = None,
    *,
    key: str = "emp_id",
    fields: Sequence[str] = TIMESHEET_FIELDS,
) -> list[dict]:
    """Build display rows for every roster entry.

    Per resource: a persisted record wins (its ``id`` included, so a later save
    targets an update); else an unsaved prior row is reused as-is; else a fresh
    row with empty-string editable fields.
    """

    prior = prior or {}
    rows: list[dict] = []
    seen: set = set()

    for resource in roster:
        k = resource.get(key)
        if k is not None:
            if k in seen:
                continue
            seen.add(k)

        # Rows without a key can never match saved or unsaved state.
        record = persisted.get(k) if k is not None else None
        if record is not None:
            rows.append(_merge_persisted(resource, record, fields))
        elif k is not None and k in prior:
            rows.append(dict(prior[k]))
        else:
            row = dict(resource)
            for name in fields:
                row[name] = ""
            rows.append(row)

    return rows


def orphaned_keys(
    roster: Sequence[Mapping[str, Any]],
    persisted: Mapping[Hashable, Any],
    *,
    key: str = "emp_id",
) -> list:
    """Persisted keys with no roster entry (e.g. rows of a deleted resource)."""
    known = {r.get(key) for r in roster}
    return [k for k in persisted if k not in known]


@dataclass(frozen=True)
class SnapshotView:
    """Read model handed to the HTTP layer for one render cycle."""

    rows: list
    orphaned: list = field(default_factory=list)
    degraded: bool = False

    def as_dict(self) -> dict:
        out = {"rows": self.rows, "orphaned": self.orphaned, "degraded": self.degraded}
        if self.degraded:
            out["message"] = "Saved data could not be loaded; showing unsaved and empty rows."
        return out

"""Attendance (CAM status) aggregation over a month's weekday grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence, Tuple

from ..common.validators import require_status
from ..core.enums import CellState
from ..core.exceptions import ValidationError
from .grid import Period, weekdays_in_month

# resource_id -> date key ("YYYY-MM-DD") -> 0|1
AttendanceMap = dict


@dataclass(frozen=True)
class AttendanceEntry:
    resource_id: int
    date: str
    status: int

    def as_dict(self) -> dict:
        return {"resource_id": self.resource_id, "date": self.date, "status": self.status}


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)


def build_attendance_map(records: Iterable[Any]) -> AttendanceMap:
    """Group records by resource then date; last one wins on duplicates."""
    amap: AttendanceMap = {}
    for record in records:
        rid = int(_field(record, "resource_id"))
        amap.setdefault(rid, {})[str(_field(record, "date"))] = int(_field(record, "status"))
    return amap


def count_checked(amap: AttendanceMap, resource_id: int, year: int, month: int) -> Tuple[int, int]:
    """(checked, total) over the weekdays of year/month only."""
    days = weekdays_in_month(year, month)
    statuses = amap.get(resource_id, {})
    period = Period(year, month)
    checked = sum(1 for day in days if statuses.get(period.date_key(day)) == 1)
    return checked, len(days)


def toggle(
    amap: AttendanceMap,
    resource_id: int,
    date_key: str,
    status: int,
    *,
    year: int,
    month: int,
) -> Tuple[int, int]:
    amap.setdefault(resource_id, {})[date_key] = status
    return count_checked(amap, resource_id, year, month)


def cell_state(amap: AttendanceMap, resource_id: int, date_key: str) -> CellState:
    status = amap.get(resource_id, {}).get(date_key)
    if status is None:
        return CellState.UNSET
    return CellState.CHECKED if status == 1 else CellState.UNCHECKED


def flatten(amap: AttendanceMap) -> list[AttendanceEntry]:
    return [
        AttendanceEntry(resource_id=rid, date=d, status=status)
        for rid in sorted(amap)
        for d, status in sorted(amap[rid].items())
    ]


class AttendanceGrid:
    """Per-session CAM status grid for one period."""

    def __init__(self, period: Period):
        self.period = period
        self.weekdays = weekdays_in_month(period.year, period.month)
        self._date_keys = {period.date_key(d) for d in self.weekdays}
        self._map: AttendanceMap = {}

    @property
    def attendance_map(self) -> AttendanceMap:
        return self._map

    def load(self, records: Iterable[Any]) -> None:
        self._map = build_attendance_map(records)

    def toggle(self, resource_id: int, date_key: str, status: Any) -> Tuple[int, int]:
        status = require_status(status)
        if date_key not in self._date_keys:
            raise ValidationError(f"{date_key} is not a weekday of {self.period.year}-{self.period.month:02d}")
        return toggle(self._map, int(resource_id), date_key, status, year=self.period.year, month=self.period.month)

    def rows(self, roster: Sequence[Mapping[str, Any]]) -> list[dict]:
        out = []
        for resource in roster:
            rid = int(resource["resource_id"])
            checked, total = count_checked(self._map, rid, self.period.year, self.period.month)
            out.append(
                {
                    "resource_id": rid,
                    "name": resource.get("name"),
                    "cells": [
                        {
                            "date": self.period.date_key(day),
                            "state": cell_state(self._map, rid, self.period.date_key(day)).value,
                        }
                        for day in self.weekdays
                    ],
                    "checked": checked,
                    "total": total,
                }
            )
        return out

    def entries(self) -> list[AttendanceEntry]:
        return flatten(self._map)

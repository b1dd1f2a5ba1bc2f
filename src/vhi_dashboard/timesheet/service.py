from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import optional_int, require_int, require_month, require_non_empty, require_year
from ..core.constants import TIMESHEET_FIELDS
from ..core.exceptions import NotFoundError, StoreError, ValidationError
from ..periods.board import SnapshotBoard
from ..periods.grid import week_range, weeks_in_month
from ..periods.merge import SnapshotView, index_by, merge_snapshot, orphaned_keys
from ..resources.repository import ResourceRepository
from .model import TimesheetEntry, TimesheetFilter
from .repository import TimesheetRepository

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


class TimesheetService:
    """Use case: per-period timesheet tracking rows for the whole roster."""

    def __init__(self, entries: TimesheetRepository, resources: ResourceRepository):
        self._entries = entries
        self._resources = resources

    def week_options(self, year: Any, month: Any) -> list[dict]:
        year, month = require_year(year), require_month(month)
        return [dict(w.as_dict(), index=i) for i, w in enumerate(weeks_in_month(year, month))]

    def validate_week(self, year: int, month: int, week: Any) -> Optional[int]:
        week = optional_int(week, "week")
        if week is None:
            return None
        try:
            week_range(year, month, week)
        except IndexError as e:
            raise ValidationError(str(e)) from e
        return week

    def parse_filter(self, args: Mapping[str, Any]) -> TimesheetFilter:
        year = None if args.get("year") in (None, "") else require_year(args.get("year"))
        month = None if args.get("month") in (None, "") else require_month(args.get("month"))
        week = optional_int(args.get("week"), "week")
        if week is not None and year is not None and month is not None:
            week = self.validate_week(year, month, week)
        emp_id = (args.get("emp_id") or "").strip() or None
        return TimesheetFilter(year=year, month=month, week=week, emp_id=emp_id)

    def list(self, filters: TimesheetFilter) -> Sequence[TimesheetEntry]:
        return list(self._entries.list(filters))

    def _clean(self, data: Mapping[str, Any]) -> dict:
        emp_id = require_non_empty(data.get("emp_id"), "Employee ID")
        year = require_year(data.get("year"))
        month = require_month(data.get("month"))
        week = self.validate_week(year, month, data.get("week"))
        if not self._resources.get_by_emp_id(emp_id):
            raise ValidationError(f"Unknown employee {emp_id}")
        out = {"emp_id": emp_id, "year": year, "month": month, "week": week}
        for name in TIMESHEET_FIELDS:
            out[name] = _text(data.get(name))
        return out

    def save(self, data: Mapping[str, Any]) -> TimesheetEntry:
        """Create or update by natural key (emp_id, year, month, week)."""
        clean = self._clean(data)
        entry_id = self._entries.upsert(**clean)
        logger.info(
            "timesheet saved id=%s emp_id=%s period=%s-%s week=%s",
            entry_id, clean["emp_id"], clean["year"], clean["month"], clean["week"],
        )
        return TimesheetEntry(id=entry_id, **clean)

    def update(self, entry_id: Any, data: Mapping[str, Any]) -> TimesheetEntry:
        entry_id = require_int(entry_id, "id")
        clean = self._clean(data)
        if not self._entries.update(entry_id=entry_id, **clean):
            raise NotFoundError("Timesheet entry not found")
        return TimesheetEntry(id=entry_id, **clean)

    def delete(self, entry_id: Any) -> None:
        entry_id = require_int(entry_id, "id")
        if not self._entries.delete(entry_id=entry_id):
            raise NotFoundError("Timesheet entry not found")
        logger.info("timesheet deleted id=%s", entry_id)

    # Snapshot views

    def _load(self, year: int, month: int, week: Optional[int]):
        """Roster rows (None when unreadable), persisted rows by emp_id, degraded flag."""
        degraded = False
        try:
            roster = [r.as_row() for r in self._resources.list_all()]
        except StoreError as e:
            logger.warning("roster unavailable for timesheet %s-%s: %s", year, month, e)
            roster, degraded = None, True

        try:
            entries = self._entries.list(TimesheetFilter(year=year, month=month))
        except StoreError as e:
            logger.warning("timesheet entries unavailable for %s-%s: %s", year, month, e)
            entries, degraded = [], True

        persisted = index_by((e.as_dict() for e in entries if e.week == week), "emp_id")
        return roster, persisted, degraded

    def snapshot(self, year: Any, month: Any, week: Any = None) -> SnapshotView:
        """Stateless merged view of roster and saved rows for one period."""
        year, month = require_year(year), require_month(month)
        week = self.validate_week(year, month, week)
        roster, persisted, degraded = self._load(year, month, week)
        roster = roster or []
        rows = merge_snapshot(roster, persisted, key="emp_id", fields=TIMESHEET_FIELDS)
        orphaned = orphaned_keys(roster, persisted) if not degraded else []
        return SnapshotView(rows=rows, orphaned=orphaned, degraded=degraded)

    def refresh_board(self, board: SnapshotBoard, year: Any, month: Any, week: Any = None) -> SnapshotView:
        year, month = require_year(year), require_month(month)
        week = self.validate_week(year, month, week)
        loaded: dict = {}

        def load():
            roster, persisted, degraded = self._load(year, month, week)
            loaded.update(roster=roster, persisted=persisted, degraded=degraded)
            if roster is None:
                return None
            return roster, persisted

        rows = board.refresh((year, month, week), load)
        if rows is None:
            rows = board.rows
        orphaned = [] if loaded["degraded"] else orphaned_keys(loaded["roster"], loaded["persisted"])
        return SnapshotView(rows=rows, orphaned=orphaned, degraded=loaded["degraded"])

    def _board_period(self, board: SnapshotBoard) -> tuple:
        if board.period_key is None:
            raise ValidationError("Load the timesheet board for a period first")
        return board.period_key

    def save_board_row(self, board: SnapshotBoard, emp_id: str) -> TimesheetEntry:
        year, month, week = self._board_period(board)
        row = board.row(emp_id)
        data = dict(row, year=year, month=month, week=week)
        if row.get("id"):
            entry = self.update(row["id"], data)
        else:
            entry = self.save(data)
        self.refresh_board(board, year, month, week)
        return entry

    def delete_board_row(self, board: SnapshotBoard, emp_id: str) -> None:
        year, month, week = self._board_period(board)
        row = board.row(emp_id)
        if not row.get("id"):
            raise NotFoundError(f"No saved timesheet for {emp_id}")
        self.delete(row["id"])
        board.discard(emp_id)
        self.refresh_board(board, year, month, week)

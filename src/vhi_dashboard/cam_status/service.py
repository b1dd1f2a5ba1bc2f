from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Tuple

from ..common.datetime_utils import format_date_key
from ..common.validators import require_int, require_iso_date, require_month, require_status, require_year
from ..core.exceptions import StoreError, ValidationError
from ..periods.attendance import AttendanceEntry, AttendanceGrid
from ..periods.grid import Period
from ..resources.repository import ResourceRepository
from .model import CamStatusRecord
from .repository import CamStatusRepository

logger = logging.getLogger(__name__)


class CamStatusService:
    """Use case: monthly attendance grid per resource, saved as (resource, date) cells."""

    def __init__(self, records: CamStatusRepository, resources: ResourceRepository):
        self._records = records
        self._resources = resources

    def list(self, year: Any = None, month: Any = None) -> Sequence[CamStatusRecord]:
        year = None if year in (None, "") else require_year(year)
        month = None if month in (None, "") else require_month(month)
        return list(self._records.list(year=year, month=month))

    def _clean_entry(self, raw: Any) -> AttendanceEntry:
        if not isinstance(raw, Mapping):
            raise ValidationError("Each entry must be an object")
        return AttendanceEntry(
            resource_id=require_int(raw.get("resource_id"), "resource_id"),
            date=format_date_key(require_iso_date(raw.get("date"), "date")),
            status=require_status(raw.get("status")),
        )

    def _require_known(self, resource_ids) -> None:
        known = {r.id for r in self._resources.list_all()}
        unknown = sorted(set(resource_ids) - known)
        if unknown:
            raise ValidationError(f"Unknown resource_id: {', '.join(str(i) for i in unknown)}")

    def save_many(self, entries: Any) -> list[int]:
        if not isinstance(entries, list):
            raise ValidationError("Invalid request body. Expected { entries: [...] }")
        clean = [self._clean_entry(e) for e in entries]
        if clean:
            self._require_known(e.resource_id for e in clean)
        ids = self._records.save_many(clean)
        logger.info("cam status saved: %s entries", len(ids))
        return ids

    # Grid

    def open_grid(self, year: Any, month: Any) -> Tuple[AttendanceGrid, dict]:
        """Fresh grid for the period, loaded from the store, plus its view."""
        period = Period(require_year(year), require_month(month))
        grid = AttendanceGrid(period)
        degraded = False

        try:
            grid.load(self._records.list(year=period.year, month=period.month))
        except StoreError as e:
            logger.warning("cam status unavailable for %s-%02d: %s", period.year, period.month, e)
            degraded = True

        return grid, self.grid_view(grid, degraded=degraded)

    def grid_view(self, grid: AttendanceGrid, *, degraded: bool = False) -> dict:
        try:
            roster = [r.as_row() for r in self._resources.list_all()]
        except StoreError as e:
            logger.warning("roster unavailable for cam status grid: %s", e)
            roster, degraded = [], True

        return {
            "year": grid.period.year,
            "month": grid.period.month,
            "days": [grid.period.date_key(d) for d in grid.weekdays],
            "rows": grid.rows(roster),
            "degraded": degraded,
        }

    def toggle(self, grid: Optional[AttendanceGrid], resource_id: Any, date_key: Any, status: Any) -> dict:
        if grid is None:
            raise ValidationError("Load the CAM status grid for a period first")
        resource_id = require_int(resource_id, "resource_id")
        self._require_known([resource_id])
        date_key = format_date_key(require_iso_date(date_key, "date"))
        checked, total = grid.toggle(resource_id, date_key, status)
        return {"resource_id": resource_id, "date": date_key, "checked": checked, "total": total}

    def save_grid(self, grid: Optional[AttendanceGrid]) -> list[int]:
        if grid is None:
            raise ValidationError("Load the CAM status grid for a period first")
        ids = self._records.save_many(grid.entries())
        logger.info("cam status grid %s-%02d saved: %s entries", grid.period.year, grid.period.month, len(ids))
        return ids

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_month, require_non_empty, require_year
from ..core.constants import NOMINATION_FIELDS
from ..core.enums import NominationTier
from ..core.exceptions import StoreError, ValidationError
from ..periods.merge import SnapshotView, index_by, merge_snapshot, orphaned_keys
from ..resources.repository import ResourceRepository
from .model import Nomination
from .repository import NominationRepository

logger = logging.getLogger(__name__)

# Placeholder option of the tier picker; rows left on it are not nominations.
_UNSELECTED = ("", "Select")


class BoldMindsService:
    def __init__(self, nominations: NominationRepository, resources: ResourceRepository):
        self._nominations = nominations
        self._resources = resources

    def list(self, year: Any = None) -> Sequence[Nomination]:
        year = None if year in (None, "") else require_year(year)
        return list(self._nominations.list(year=year))

    def roster(self, year: Any) -> SnapshotView:
        """Every resource with its nomination for ``year``, blank when none."""
        year = require_year(year)
        degraded = False

        try:
            roster = [dict(r.as_row(), resource_name=r.name) for r in self._resources.list_all()]
        except StoreError as e:
            logger.warning("roster unavailable for bold minds %s: %s", year, e)
            roster, degraded = [], True

        try:
            nominations = self._nominations.list(year=year)
        except StoreError as e:
            logger.warning("nominations unavailable for %s: %s", year, e)
            nominations, degraded = [], True

        persisted = index_by((n.as_dict() for n in nominations), "emp_id")
        rows = merge_snapshot(roster, persisted, key="emp_id", fields=NOMINATION_FIELDS)
        return SnapshotView(rows=rows, orphaned=orphaned_keys(roster, persisted), degraded=degraded)

    def _clean(self, raw: Any, year: Optional[int], names: Mapping[str, str]) -> Optional[Nomination]:
        if not isinstance(raw, Mapping):
            raise ValidationError("Each nomination must be an object")

        tier = (raw.get("nominated_for") or "").strip()
        if tier in _UNSELECTED:
            return None
        try:
            tier = NominationTier(tier).value
        except ValueError:
            raise ValidationError(f"nominated_for must be one of Gold, Silver, Bronze (got {tier!r})")

        emp_id = require_non_empty(raw.get("emp_id"), "Employee ID")
        nominated_year = require_year(raw.get("nominated_year") or year)
        resource_name = (raw.get("resource_name") or "").strip() or names.get(emp_id)
        if not resource_name:
            raise ValidationError(f"Unknown employee {emp_id}")

        return Nomination(
            id=0,
            emp_id=emp_id,
            resource_name=resource_name,
            nominated_for=tier,
            nominated_month=require_month(raw.get("nominated_month")),
            nominated_year=nominated_year,
        )

    def save(self, nominations: Any, *, year: Any = None) -> list[int]:
        """Upsert the picked nominations; rows without a tier are skipped."""
        if not isinstance(nominations, list):
            raise ValidationError("Invalid request body. Expected { nominations: [...] }")
        year = None if year in (None, "") else require_year(year)
        names = {r.emp_id: r.name for r in self._resources.list_all()}

        clean = [n for n in (self._clean(raw, year, names) for raw in nominations) if n is not None]
        ids = self._nominations.save_many(clean)
        logger.info("bold minds saved: %s nominations (%s skipped)", len(ids), len(nominations) - len(clean))
        return ids

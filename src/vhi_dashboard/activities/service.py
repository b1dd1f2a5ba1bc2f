from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ..common.datetime_utils import format_date_key
from ..common.validators import require_int, require_iso_date, require_month, require_non_empty, require_year
from ..core.exceptions import NotFoundError, ValidationError
from .model import ActivityFilter, ActivityRecord, ColumnKind, ColumnSpec
from .repository import ActivityRepository

logger = logging.getLogger(__name__)

# Older clients post camelCase keys.
_ALIASES = {"empId": "emp_id", "resourceName": "resource_name"}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ActivityService:
    """Use case: record and list one kind of dated activity per resource."""

    def __init__(self, records: ActivityRepository):
        self._records = records
        self.spec = records.spec

    def parse_filter(self, args: Mapping[str, Any]) -> ActivityFilter:
        year = None if _blank(args.get("year")) else require_year(args.get("year"))
        month = None if _blank(args.get("month")) else require_month(args.get("month"))
        resource = args.get(self.spec.resource_column) or args.get("resource")
        return ActivityFilter(year=year, month=month, resource=(resource or "").strip() or None)

    def _clean_value(self, column: ColumnSpec, value: Any) -> Any:
        if _blank(value):
            if column.required:
                raise ValidationError(f"{column.label} is required")
            return None
        if column.kind is ColumnKind.DATE:
            return format_date_key(require_iso_date(value, column.label))
        if column.kind is ColumnKind.INT:
            number = require_int(value, column.label)
            if number < 0:
                raise ValidationError(f"{column.label} must not be negative")
            return number
        return require_non_empty(value, column.label)

    def clean(self, data: Mapping[str, Any]) -> dict:
        data = {_ALIASES.get(k, k): v for k, v in data.items()}
        values = {c.name: self._clean_value(c, data.get(c.name)) for c in self.spec.columns}

        if self.spec.date_range:
            start, end = self.spec.date_range
            if values.get(start) and values.get(end) and values[end] < values[start]:
                raise ValidationError("End date cannot be before start date")
        return values

    def list(self, filters: ActivityFilter) -> Sequence[ActivityRecord]:
        return list(self._records.list(filters))

    def create(self, data: Mapping[str, Any]) -> ActivityRecord:
        values = self.clean(data)
        record_id = self._records.create(values)
        logger.info("%s created id=%s", self.spec.kind, record_id)
        return ActivityRecord(id=record_id, values=values)

    def update(self, record_id: Any, data: Mapping[str, Any]) -> ActivityRecord:
        record_id = require_int(record_id, "id")
        values = self.clean(data)
        if not self._records.update(record_id, values):
            raise NotFoundError(f"{self.spec.label} not found")
        return ActivityRecord(id=record_id, values=values)

    def delete(self, record_id: Any) -> None:
        record_id = require_int(record_id, "id")
        if not self._records.delete(record_id):
            raise NotFoundError(f"{self.spec.label} not found")
        logger.info("%s deleted id=%s", self.spec.kind, record_id)

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Resource
from .repository import ResourceRepository

logger = logging.getLogger(__name__)


class ResourceService:
    """Use case: maintain the roster (admin) and read it (everyone)."""

    def __init__(self, resources: ResourceRepository):
        self._resources = resources

    def roster(self) -> Sequence[Resource]:
        return list(self._resources.list_all())

    def roster_rows(self) -> list[dict]:
        return [r.as_row() for r in self.roster()]

    def list_with_columns(self) -> dict:
        """Roster with custom column values folded in, plus the column names."""
        columns = list(self._resources.list_columns())
        values: dict[int, dict] = {}
        for v in self._resources.list_values():
            if v.column_name in columns:
                values.setdefault(v.resource_id, {})[v.column_name] = v.value or ""

        resources = []
        for r in self.roster():
            extra = {c: values.get(r.id, {}).get(c, "") for c in columns}
            resources.append(replace(r, extra=extra).as_dict())
        return {"resources": resources, "columns": columns}

    def create(self, *, emp_id: str, name: str) -> Resource:
        emp_id = require_non_empty(emp_id, "Employee ID")
        name = require_non_empty(name, "Name")

        if self._resources.get_by_emp_id(emp_id):
            raise ConflictError(f"Employee ID {emp_id} already exists")

        resource_id = self._resources.create(emp_id=emp_id, name=name)
        logger.info("resource created id=%s emp_id=%s", resource_id, emp_id)
        return Resource(id=resource_id, emp_id=emp_id, name=name)

    def rename(self, *, emp_id: str, name: str) -> None:
        name = require_non_empty(name, "Name")
        if not self._resources.update_name(emp_id=emp_id, name=name):
            raise NotFoundError("Resource not found")

    def delete(self, *, resource_id: int) -> None:
        # Per-period records referencing the resource are kept; they show up as orphans.
        if not self._resources.delete(resource_id=int(resource_id)):
            raise NotFoundError("Resource not found")
        logger.info("resource deleted id=%s", resource_id)

    def list_columns(self) -> Sequence[str]:
        return list(self._resources.list_columns())

    def add_column(self, *, name: str) -> None:
        name = require_non_empty(name, "Column name")
        if name in self._resources.list_columns():
            raise ConflictError(f"Column {name} already exists")
        self._resources.add_column(name=name)

    def delete_column(self, *, name: str) -> None:
        if not self._resources.delete_column(name=name):
            raise NotFoundError("Column not found")

    def set_value(self, *, resource_id: int, column_name: str, value: Optional[str]) -> None:
        column_name = require_non_empty(column_name, "Column name")
        if column_name not in self._resources.list_columns():
            raise ValidationError(f"Unknown column {column_name}")
        if not self._resources.get_by_id(int(resource_id)):
            raise NotFoundError("Resource not found")
        self._resources.upsert_value(resource_id=int(resource_id), column_name=column_name, value=value)

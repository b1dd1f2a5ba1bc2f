"""Dated per-resource activity records (leaves, trainings, learnings, certifications).

The four tables share one CRUD path; a ``TableSpec`` says which columns each has.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..core.enums import Menu


class ColumnKind(str, Enum):
    TEXT = "text"
    DATE = "date"
    INT = "int"


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    label: str
    kind: ColumnKind = ColumnKind.TEXT
    required: bool = False


@dataclass(frozen=True)
class TableSpec:
    kind: str
    table: str
    menu: Menu
    label: str
    columns: tuple[ColumnSpec, ...]
    date_column: str
    resource_column: str = "emp_id"
    # (start, end) pair that must not be reversed
    date_range: Optional[tuple[str, str]] = None

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.columns)


@dataclass(frozen=True)
class ActivityRecord:
    id: int
    values: dict = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {"id": self.id, **self.values}


@dataclass(frozen=True)
class ActivityFilter:
    year: Optional[int] = None
    month: Optional[int] = None
    resource: Optional[str] = None


LEAVES = TableSpec(
    kind="leaves",
    table="leaves",
    menu=Menu.LEAVES,
    label="Leave",
    columns=(
        ColumnSpec("date", "Date", ColumnKind.DATE, required=True),
        ColumnSpec("resource", "Resource", required=True),
        ColumnSpec("type", "Leave type", required=True),
        ColumnSpec("hours", "Hours", ColumnKind.INT, required=True),
    ),
    date_column="date",
    resource_column="resource",
)

TRAININGS = TableSpec(
    kind="trainings",
    table="trainings",
    menu=Menu.TRAININGS,
    label="Training",
    columns=(
        ColumnSpec("emp_id", "Employee ID", required=True),
        ColumnSpec("resource_name", "Resource name", required=True),
        ColumnSpec("platform", "Platform", required=True),
        ColumnSpec("course_name", "Course name"),
        ColumnSpec("description", "Description"),
        ColumnSpec("start_date", "Start date", ColumnKind.DATE, required=True),
        ColumnSpec("end_date", "End date", ColumnKind.DATE),
        ColumnSpec("hours", "Hours", ColumnKind.INT),
    ),
    date_column="start_date",
    date_range=("start_date", "end_date"),
)

LEARNINGS = TableSpec(
    kind="learnings",
    table="learnings",
    menu=Menu.LEARNINGS,
    label="Learning",
    columns=(
        ColumnSpec("emp_id", "Employee ID", required=True),
        ColumnSpec("resource_name", "Resource name", required=True),
        ColumnSpec("platform", "Platform", required=True),
        ColumnSpec("description", "Description"),
        ColumnSpec("date", "Date", ColumnKind.DATE, required=True),
    ),
    date_column="date",
)

CERTIFICATIONS = TableSpec(
    kind="certifications",
    table="certifications",
    menu=Menu.CERTIFICATIONS,
    label="Certification",
    columns=(
        ColumnSpec("emp_id", "Employee ID", required=True),
        ColumnSpec("resource_name", "Resource name", required=True),
        ColumnSpec("certification_name", "Certification name", required=True),
        ColumnSpec("description", "Description"),
        ColumnSpec("date", "Date", ColumnKind.DATE, required=True),
    ),
    date_column="date",
)

ACTIVITY_TABLES: dict[str, TableSpec] = {t.kind: t for t in (LEAVES, TRAININGS, LEARNINGS, CERTIFICATIONS)}


def table_spec(kind: str) -> TableSpec:
    try:
        return ACTIVITY_TABLES[kind]
    except KeyError:
        raise ValueError(f"Unknown activity kind: {kind}") from None

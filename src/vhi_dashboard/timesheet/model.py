from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class TimesheetEntry:
    """Domain entity: one resource's timesheet tracking row for a period.

    ``week`` is an index into ``weeks_in_month(year, month)``; None covers the whole month.
    """

    id: int
    emp_id: str
    year: int
    month: int
    week: Optional[int]
    whizible: str = ""
    changepoint: str = ""
    planview: str = ""
    comments: str = ""

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class TimesheetFilter:
    """Listing filter; None means "all" for that field."""

    year: Optional[int] = None
    month: Optional[int] = None
    week: Optional[int] = None
    emp_id: Optional[str] = None

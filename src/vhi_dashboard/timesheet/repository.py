from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import TimesheetEntry, TimesheetFilter


class TimesheetRepository(Protocol):
    def list(self, filters: TimesheetFilter) -> Sequence[TimesheetEntry]:
        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[TimesheetEntry]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        emp_id: str,
        year: int,
        month: int,
        week: Optional[int],
        whizible: str,
        changepoint: str,
        planview: str,
        comments: str,
    ) -> int:
        """Insert, or update the row with the same (emp_id, year, month, week).

        Returns the entry id.
        """

        raise NotImplementedError

    def update(
        self,
        *,
        entry_id: int,
        emp_id: str,
        year: int,
        month: int,
        week: Optional[int],
        whizible: str,
        changepoint: str,
        planview: str,
        comments: str,
    ) -> bool:
        raise NotImplementedError

    def delete(self, *, entry_id: int) -> bool:
        raise NotImplementedError

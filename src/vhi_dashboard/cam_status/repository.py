from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..periods.attendance import AttendanceEntry
from .model import CamStatusRecord


class CamStatusRepository(Protocol):
    def list(
        self,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        resource_id: Optional[int] = None,
    ) -> Sequence[CamStatusRecord]:
        raise NotImplementedError

    def save_many(self, entries: Sequence[AttendanceEntry]) -> list[int]:
        """Upsert on (resource_id, date); returns the ids in input order."""

        raise NotImplementedError

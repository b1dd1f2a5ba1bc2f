from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ActivityFilter, ActivityRecord, TableSpec


class ActivityRepository(Protocol):
    """CRUD over one activity table described by ``spec``."""

    spec: TableSpec

    def list(self, filters: ActivityFilter) -> Sequence[ActivityRecord]:
        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[ActivityRecord]:
        raise NotImplementedError

    def create(self, values: dict) -> int:
        raise NotImplementedError

    def update(self, record_id: int, values: dict) -> bool:
        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Resource, ResourceValue


class ResourceRepository(Protocol):
    """Repository interface for the roster and its custom columns."""

    def list_all(self) -> Sequence[Resource]:
        """Roster ordered by name."""

        raise NotImplementedError

    def get_by_id(self, resource_id: int) -> Optional[Resource]:
        raise NotImplementedError

    def get_by_emp_id(self, emp_id: str) -> Optional[Resource]:
        raise NotImplementedError

    def create(self, *, emp_id: str, name: str) -> int:
        raise NotImplementedError

    def update_name(self, *, emp_id: str, name: str) -> bool:
        raise NotImplementedError

    def delete(self, *, resource_id: int) -> bool:
        raise NotImplementedError

    def list_columns(self) -> Sequence[str]:
        raise NotImplementedError

    def add_column(self, *, name: str) -> int:
        raise NotImplementedError

    def delete_column(self, *, name: str) -> bool:
        raise NotImplementedError

    def list_values(self) -> Sequence[ResourceValue]:
        raise NotImplementedError

    def upsert_value(self, *, resource_id: int, column_name: str, value: Optional[str]) -> None:
        raise NotImplementedError

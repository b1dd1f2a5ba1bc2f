from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Resource:
    """Domain entity: one employee on the roster.

    ``emp_id`` is the stable business key every per-period record refers to;
    ``id`` is assigned by the store.
    """

    id: int
    emp_id: str
    name: str
    extra: dict = field(default_factory=dict)

    def as_row(self) -> dict:
        """Roster row used as the base of snapshot rows."""
        return {"resource_id": self.id, "emp_id": self.emp_id, "name": self.name}

    def as_dict(self) -> dict:
        out = {"id": self.id, "emp_id": self.emp_id, "name": self.name}
        out.update(self.extra)
        return out


@dataclass(frozen=True)
class ResourceValue:
    resource_id: int
    column_name: str
    value: Optional[str]

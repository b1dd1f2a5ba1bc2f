from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class CamStatusRecord:
    """Persisted attendance cell: one resource on one date, status 0 or 1."""

    id: int
    resource_id: int
    date: str
    status: int
    resource_name: Optional[str] = None

    def as_dict(self) -> dict:
        return asdict(self)

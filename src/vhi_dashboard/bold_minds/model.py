from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Nomination:
    """Bold Minds peer nomination; at most one per employee per year."""

    id: int
    emp_id: str
    resource_name: str
    nominated_for: str
    nominated_month: int
    nominated_year: int

    def as_dict(self) -> dict:
        return asdict(self)

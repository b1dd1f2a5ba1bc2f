from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Nomination


class NominationRepository(Protocol):
    def list(self, *, year: Optional[int] = None) -> Sequence[Nomination]:
        raise NotImplementedError

    def save_many(self, nominations: Sequence[Nomination]) -> list[int]:
        """Upsert on (emp_id, nominated_year); ``id`` of the inputs is ignored."""

        raise NotImplementedError

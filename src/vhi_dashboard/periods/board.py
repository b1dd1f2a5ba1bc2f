from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Hashable, Mapping, Optional, Sequence, Tuple

from ..core.constants import TIMESHEET_FIELDS
from ..core.exceptions import NotFoundError, ValidationError
from .merge import merge_snapshot

logger = logging.getLogger(__name__)

# A loader returns (roster, persisted), or None when the roster could not be read.
Loader = Callable[[], Optional[Tuple[Sequence[Mapping[str, Any]], Mapping[Hashable, Mapping[str, Any]]]]]


class RefreshGuard:
    """Monotonic request tokens; only the latest issued token is current."""

    def __init__(self) -> None:
        self._latest = 0
        self._lock = threading.Lock()

    def issue(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest

    @property
    def latest(self) -> int:
        return self._latest


class SnapshotBoard:
    """Per-session snapshot rows of one editable table (timesheet, nominations).

    Rows survive background refreshes until saved; switching period drops them.
    """

    def __init__(self, *, key: str = "emp_id", fields: Sequence[str] = TIMESHEET_FIELDS):
        self._key = key
        self._fields = tuple(fields)
        self._guard = RefreshGuard()
        self._lock = threading.Lock()
        self._period_key: Optional[Hashable] = None
        self._rows: dict = {}

    @property
    def period_key(self) -> Optional[Hashable]:
        return self._period_key

    @property
    def rows(self) -> list[dict]:
        return [dict(r) for r in self._rows.values()]

    def row(self, key_value: Hashable) -> dict:
        row = self._rows.get(key_value)
        if row is None:
            raise NotFoundError(f"No row for {self._key}={key_value}")
        return dict(row)

    def refresh(self, period_key: Hashable, load: Loader) -> Optional[list[dict]]:
        """Reload from ``load()`` and merge with local rows.

        Returns the merged rows, or None when a newer refresh started while
        this one was loading (the late result is dropped). When ``load()``
        returns None the local rows are kept untouched: the current rows for
        the same period, an empty list for another one.
        """

        token = self._guard.issue()
        loaded = load()
        with self._lock:
            if not self._guard.is_current(token):
                logger.debug("discarding stale refresh token=%s latest=%s", token, self._guard.latest)
                return None

            if loaded is None:
                logger.warning("roster unavailable, keeping local rows for %s", period_key)
                return self.rows if period_key == self._period_key else []

            roster, persisted = loaded
            prior = self._rows if period_key == self._period_key else {}
            merged = merge_snapshot(roster, persisted, prior, key=self._key, fields=self._fields)
            self._period_key = period_key
            self._rows = {r.get(self._key): r for r in merged}
            return self.rows

    def edit(self, key_value: Hashable, field: str, value: Any) -> dict:
        if field not in self._fields:
            raise ValidationError(f"Field '{field}' is not editable")
        with self._lock:
            row = self._rows.get(key_value)
            if row is None:
                raise NotFoundError(f"No row for {self._key}={key_value}")
            row[field] = "" if value is None else value
            return dict(row)

    def discard(self, key_value: Hashable) -> None:
        """Forget local state for a row so the next refresh rebuilds it fresh."""
        with self._lock:
            self._rows.pop(key_value, None)

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable, MutableMapping, Optional

from ..core.constants import DEFAULT_SESSION_DAYS, TIMESHEET_FIELDS
from ..periods.attendance import AttendanceGrid
from ..periods.board import SnapshotBoard

logger = logging.getLogger(__name__)

SESSION_KEY = "workspace_id"


@dataclass
class Workspace:
    """View state of one logged-in session: unsaved rows and the loaded attendance grid."""

    timesheet: SnapshotBoard = field(default_factory=lambda: SnapshotBoard(key="emp_id", fields=TIMESHEET_FIELDS))
    cam_grid: Optional[AttendanceGrid] = None
    last_seen: float = 0.0


class WorkspaceRegistry:
    """In-process store of workspaces keyed by a random id kept in the Flask session.

    Workspaces unused for longer than ``max_age`` are evicted on the next lookup,
    so sessions that expire or are abandoned without logout do not pile up.
    """

    def __init__(
        self,
        *,
        max_age: timedelta = timedelta(days=DEFAULT_SESSION_DAYS),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_age = max_age
        self._clock = clock
        self._lock = threading.Lock()
        self._workspaces: dict[str, Workspace] = {}

    def __len__(self) -> int:
        return len(self._workspaces)

    def _evict_stale(self, now: float) -> None:
        cutoff = now - self.max_age.total_seconds()
        stale = [wid for wid, ws in self._workspaces.items() if ws.last_seen < cutoff]
        for wid in stale:
            del self._workspaces[wid]
        if stale:
            logger.info("evicted %s idle workspaces", len(stale))

    def get_or_create(self, workspace_id: str) -> Workspace:
        now = self._clock()
        with self._lock:
            self._evict_stale(now)
            ws = self._workspaces.get(workspace_id)
            if ws is None:
                ws = self._workspaces[workspace_id] = Workspace()
                logger.debug("workspace created id=%s", workspace_id)
            ws.last_seen = now
            return ws

    def for_session(self, session: MutableMapping) -> Workspace:
        workspace_id = session.get(SESSION_KEY)
        if not workspace_id:
            workspace_id = session[SESSION_KEY] = uuid.uuid4().hex
        return self.get_or_create(workspace_id)

    def drop(self, workspace_id: Optional[str]) -> None:
        if not workspace_id:
            return
        with self._lock:
            dropped = self._workspaces.pop(workspace_id, None)
        if dropped is not None:
            logger.debug("workspace dropped id=%s", workspace_id)

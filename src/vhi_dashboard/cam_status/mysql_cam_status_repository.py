from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, month_filter, normalize_date_key
from ..periods.attendance import AttendanceEntry
from .model import CamStatusRecord
from .repository import CamStatusRepository


class MySQLCamStatusRepository(CamStatusRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(
        self,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        resource_id: Optional[int] = None,
    ) -> Sequence[CamStatusRecord]:
        clauses: list = []
        params: list = []
        month_filter("cs.date", year=year, month=month, clauses=clauses, params=params)
        if resource_id is not None:
            clauses.append("cs.resource_id=%s")
            params.append(int(resource_id))

        sql = """
            SELECT cs.id, cs.resource_id, cs.date, cs.status, r.name AS resource_name
            FROM cam_status cs
            JOIN resources r ON r.id = cs.resource_id
        """
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY cs.date, r.name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                CamStatusRecord(
                    id=int(r["id"]),
                    resource_id=int(r["resource_id"]),
                    date=normalize_date_key(r["date"]),
                    status=int(r["status"]),
                    resource_name=r.get("resource_name"),
                )
                for r in fetchall(cur)
            ]

    def save_many(self, entries: Sequence[AttendanceEntry]) -> list[int]:
        ids: list[int] = []
        with db_cursor(self._conn_factory) as (_, cur):
            for entry in entries:
                # LAST_INSERT_ID(id) makes lastrowid report the existing row on update.
                cur.execute(
                    """
                    INSERT INTO cam_status(resource_id, date, status)
                    VALUES(%s,%s,%s)
                    ON DUPLICATE KEY UPDATE status=VALUES(status), id=LAST_INSERT_ID(id)
                    """,
                    (int(entry.resource_id), entry.date, int(entry.status)),
                )
                ids.append(int(cur.lastrowid))
        return ids

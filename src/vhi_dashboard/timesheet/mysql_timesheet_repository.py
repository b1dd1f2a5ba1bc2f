from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TimesheetEntry, TimesheetFilter
from .repository import TimesheetRepository

_COLUMNS = "id, emp_id, year, month, week, whizible, changepoint, planview, comments"


def _to_entry(r: dict) -> TimesheetEntry:
    return TimesheetEntry(
        id=int(r["id"]),
        emp_id=str(r["emp_id"]),
        year=int(r["year"]),
        month=int(r["month"]),
        week=None if r.get("week") is None else int(r["week"]),
        whizible=r.get("whizible") or "",
        changepoint=r.get("changepoint") or "",
        planview=r.get("planview") or "",
        comments=r.get("comments") or "",
    )


class MySQLTimesheetRepository(TimesheetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(self, filters: TimesheetFilter) -> Sequence[TimesheetEntry]:
        clauses: list = []
        params: list = []
        if filters.year is not None:
            clauses.append("year=%s")
            params.append(int(filters.year))
        if filters.month is not None:
            clauses.append("month=%s")
            params.append(int(filters.month))
        if filters.week is not None:
            clauses.append("week=%s")
            params.append(int(filters.week))
        if filters.emp_id:
            clauses.append("emp_id=%s")
            params.append(filters.emp_id)

        sql = f"SELECT {_COLUMNS} FROM timesheet"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY year DESC, month DESC, week, emp_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_entry(r) for r in fetchall(cur)]

    def get_by_id(self, entry_id: int) -> Optional[TimesheetEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM timesheet WHERE id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def upsert(
        self,
        *,
        emp_id: str,
        year: int,
        month: int,
        week: Optional[int],
        whizible: str,
        changepoint: str,
        planview: str,
        comments: str,
    ) -> int:
        # The unique key does not stop duplicate NULL weeks, so look up with <=> first.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id FROM timesheet WHERE emp_id=%s AND year=%s AND month=%s AND week <=> %s",
                (emp_id, int(year), int(month), week),
            )
            existing = fetchone(cur)
            if existing:
                cur.execute(
                    """
                    UPDATE timesheet
                    SET whizible=%s, changepoint=%s, planview=%s, comments=%s
                    WHERE id=%s
                    """,
                    (whizible, changepoint, planview, comments, int(existing["id"])),
                )
                return int(existing["id"])

            cur.execute(
                """
                INSERT INTO timesheet(emp_id, year, month, week, whizible, changepoint, planview, comments)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (emp_id, int(year), int(month), week, whizible, changepoint, planview, comments),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        entry_id: int,
        emp_id: str,
        year: int,
        month: int,
        week: Optional[int],
        whizible: str,
        changepoint: str,
        planview: str,
        comments: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE timesheet
                SET emp_id=%s, year=%s, month=%s, week=%s,
                    whizible=%s, changepoint=%s, planview=%s, comments=%s
                WHERE id=%s
                """,
                (emp_id, int(year), int(month), week, whizible, changepoint, planview, comments, int(entry_id)),
            )
            # MySQL reports 0 affected rows when nothing changed.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT id FROM timesheet WHERE id=%s", (int(entry_id),))
            return fetchone(cur) is not None

    def delete(self, *, entry_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM timesheet WHERE id=%s", (int(entry_id),))
            return cur.rowcount > 0

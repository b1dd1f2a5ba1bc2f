from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, month_filter, normalize_date_key
from .model import ActivityFilter, ActivityRecord, ColumnKind, TableSpec
from .repository import ActivityRepository


class MySQLActivityRepository(ActivityRepository):
    # Table and column names come from TableSpec constants, never from request input.

    def __init__(self, conn_factory: DatabaseConnection, spec: TableSpec):
        self._conn_factory = conn_factory
        self.spec = spec
        self._select = f"SELECT id, {', '.join(spec.column_names)} FROM {spec.table}"

    def _to_record(self, r: dict) -> ActivityRecord:
        values = {}
        for column in self.spec.columns:
            value = r.get(column.name)
            if value is not None and column.kind is ColumnKind.DATE:
                value = normalize_date_key(value)
            elif value is not None and column.kind is ColumnKind.INT:
                value = int(value)
            values[column.name] = value
        return ActivityRecord(id=int(r["id"]), values=values)

    def list(self, filters: ActivityFilter) -> Sequence[ActivityRecord]:
        clauses: list = []
        params: list = []
        month_filter(self.spec.date_column, year=filters.year, month=filters.month, clauses=clauses, params=params)
        if filters.resource:
            clauses.append(f"{self.spec.resource_column}=%s")
            params.append(filters.resource)

        sql = self._select
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += f" ORDER BY {self.spec.date_column} DESC, id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [self._to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: int) -> Optional[ActivityRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{self._select} WHERE id=%s", (int(record_id),))
            r = fetchone(cur)
            return self._to_record(r) if r else None

    def create(self, values: dict) -> int:
        names = self.spec.column_names
        placeholders = ",".join(["%s"] * len(names))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO {self.spec.table}({', '.join(names)}) VALUES({placeholders})",
                tuple(values.get(n) for n in names),
            )
            return int(cur.lastrowid)

    def update(self, record_id: int, values: dict) -> bool:
        names = self.spec.column_names
        assignments = ", ".join(f"{n}=%s" for n in names)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {self.spec.table} SET {assignments} WHERE id=%s",
                tuple(values.get(n) for n in names) + (int(record_id),),
            )
            if cur.rowcount > 0:
                return True
            cur.execute(f"SELECT id FROM {self.spec.table} WHERE id=%s", (int(record_id),))
            return fetchone(cur) is not None

    def delete(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self.spec.table} WHERE id=%s", (int(record_id),))
            return cur.rowcount > 0

from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Resource, ResourceValue
from .repository import ResourceRepository


def _to_resource(r: dict) -> Resource:
    return Resource(id=int(r["id"]), emp_id=str(r["emp_id"]), name=r["name"])


class MySQLResourceRepository(ResourceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Resource]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, emp_id, name FROM resources ORDER BY name")
            return [_to_resource(r) for r in fetchall(cur)]

    def get_by_id(self, resource_id: int) -> Optional[Resource]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, emp_id, name FROM resources WHERE id=%s", (int(resource_id),))
            r = fetchone(cur)
            return _to_resource(r) if r else None

    def get_by_emp_id(self, emp_id: str) -> Optional[Resource]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, emp_id, name FROM resources WHERE emp_id=%s", (emp_id,))
            r = fetchone(cur)
            return _to_resource(r) if r else None

    def create(self, *, emp_id: str, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO resources(emp_id, name) VALUES(%s,%s)", (emp_id, name))
            return int(cur.lastrowid)

    def update_name(self, *, emp_id: str, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE resources SET name=%s WHERE emp_id=%s", (name, emp_id))
            return cur.rowcount > 0

    def delete(self, *, resource_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM resources WHERE id=%s", (int(resource_id),))
            return cur.rowcount > 0

    def list_columns(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name FROM resource_columns ORDER BY name")
            return [r["name"] for r in fetchall(cur)]

    def add_column(self, *, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO resource_columns(name) VALUES(%s)", (name,))
            return int(cur.lastrowid)

    def delete_column(self, *, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM resource_columns WHERE name=%s", (name,))
            deleted = cur.rowcount > 0
            if deleted:
                cur.execute("DELETE FROM resource_data WHERE column_name=%s", (name,))
            return deleted

    def list_values(self) -> Sequence[ResourceValue]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT resource_id, column_name, value FROM resource_data")
            return [
                ResourceValue(resource_id=int(r["resource_id"]), column_name=r["column_name"], value=r.get("value"))
                for r in fetchall(cur)
            ]

    def upsert_value(self, *, resource_id: int, column_name: str, value: Optional[str]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO resource_data(resource_id, column_name, value)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE value=VALUES(value)
                """,
                (int(resource_id), column_name, value),
            )

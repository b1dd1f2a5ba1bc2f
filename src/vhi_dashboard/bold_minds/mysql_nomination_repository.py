from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Nomination
from .repository import NominationRepository


class MySQLNominationRepository(NominationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list(self, *, year: Optional[int] = None) -> Sequence[Nomination]:
        sql = """
            SELECT id, emp_id, resource_name, nominated_for, nominated_month, nominated_year
            FROM bold_minds
        """
        params: tuple = ()
        if year is not None:
            sql += " WHERE nominated_year=%s"
            params = (int(year),)
        sql += " ORDER BY resource_name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [
                Nomination(
                    id=int(r["id"]),
                    emp_id=str(r["emp_id"]),
                    resource_name=r["resource_name"],
                    nominated_for=r["nominated_for"],
                    nominated_month=int(r["nominated_month"]),
                    nominated_year=int(r["nominated_year"]),
                )
                for r in fetchall(cur)
            ]

    def save_many(self, nominations: Sequence[Nomination]) -> list[int]:
        ids: list[int] = []
        with db_cursor(self._conn_factory) as (_, cur):
            for n in nominations:
                cur.execute(
                    """
                    INSERT INTO bold_minds(emp_id, resource_name, nominated_for, nominated_month, nominated_year)
                    VALUES(%s,%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE
                        resource_name=VALUES(resource_name),
                        nominated_for=VALUES(nominated_for),
                        nominated_month=VALUES(nominated_month),
                        id=LAST_INSERT_ID(id)
                    """,
                    (n.emp_id, n.resource_name, n.nominated_for, int(n.nominated_month), int(n.nominated_year)),
                )
                ids.append(int(cur.lastrowid))
        return ids

from __future__ import annotations

import json
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "id, username, password_hash, role, custom_menus, is_active"


def _dump_menus(menus: Optional[Sequence[str]]) -> Optional[str]:
    return None if menus is None else json.dumps(list(menus))


def _load_menus(raw: Optional[str]) -> Optional[tuple[str, ...]]:
    if not raw:
        return None
    try:
        menus = json.loads(raw)
    except ValueError:
        # Legacy rows stored a comma separated list.
        menus = [m.strip() for m in raw.split(",") if m.strip()]
    return tuple(str(m) for m in menus) if isinstance(menus, list) else None


def _to_user(row: dict) -> User:
    return User(
        id=int(row["id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        custom_menus=_load_menus(row.get("custom_menus")),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY username")
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        custom_menus: Optional[Sequence[str]] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(username, password_hash, role, custom_menus, is_active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (username, password_hash, role.value, _dump_menus(custom_menus)),
            )
            return int(cur.lastrowid)

    def update_user(
        self,
        *,
        user_id: int,
        username: str,
        role: Role,
        custom_menus: Optional[Sequence[str]],
        password_hash: Optional[str] = None,
    ) -> bool:
        sets = ["username=%s", "role=%s", "custom_menus=%s"]
        params: list = [username, role.value, _dump_menus(custom_menus)]
        if password_hash is not None:
            sets.append("password_hash=%s")
            params.append(password_hash)
        params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE users SET {', '.join(sets)} WHERE id=%s", tuple(params))
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT id FROM users WHERE id=%s", (int(user_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (int(user_id),))
            return cur.rowcount > 0

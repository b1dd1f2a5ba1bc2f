from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.constants import DATE_KEY_FORMAT
from ..core.exceptions import ConflictError, StoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, rollback on error.

    Driver errors surface as ConflictError (uniqueness) or StoreError.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("database connection failed: %s", e)
        raise StoreError("Database unavailable") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        conn.rollback()
        logger.warning("integrity error: %s", e)
        raise ConflictError("Record already exists") from e
    except mysql.connector.Error as e:
        conn.rollback()
        logger.error("database error: %s", e)
        raise StoreError("Database operation failed") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_date_key(value: Any) -> Optional[str]:
    """Normalize MySQL DATE values to the 'YYYY-MM-DD' key format.

    mysql-connector returns DATE as datetime.date, but string columns and
    DATETIME values show up too depending on schema history.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().strftime(DATE_KEY_FORMAT)
    if isinstance(value, date):
        return value.strftime(DATE_KEY_FORMAT)
    if isinstance(value, str):
        return value.strip()[:10]
    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")


def month_filter(column: str, *, year: Optional[int], month: Optional[int], clauses: list, params: list) -> None:
    """Append YEAR()/MONTH() clauses for a DATE column; None means no filter."""
    if year is not None:
        clauses.append(f"YEAR({column})=%s")
        params.append(int(year))
    if month is not None:
        clauses.append(f"MONTH({column})=%s")
        params.append(int(month))

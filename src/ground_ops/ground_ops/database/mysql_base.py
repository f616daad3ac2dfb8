from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

import mysql.connector

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def db_transaction(conn_factory: DatabaseConnection, *, isolation_level: str = "SERIALIZABLE"):
    """Explicit transaction for read-check-write sequences.

    Rows read with ``SELECT ... FOR UPDATE`` stay locked until commit/rollback, so
    concurrent writers touching the same rows are serialized.
    """

    conn = conn_factory.connect()
    try:
        conn.start_transaction(isolation_level=isolation_level)
        cur = conn.cursor(dictionary=True)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def is_lock_conflict(error: mysql.connector.Error) -> bool:
    """Deadlock (1213) or lock wait timeout (1205): the loser of a write race."""
    return getattr(error, "errno", None) in {1205, 1213}


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def load_json_list(value: Any) -> List[str]:
    """Normalize a JSON array column (str/bytes/list/None) into a list of strings."""

    if value is None or value == "":
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value)
    if not isinstance(value, list):
        raise TypeError(f"Expected JSON array, got {type(value)!r}")
    return [str(v) for v in value]


def in_clause(values: Iterable[Any]) -> tuple[str, tuple]:
    """Placeholders and params for ``col IN (...)``."""
    items = tuple(values)
    return ", ".join(["%s"] * len(items)), items

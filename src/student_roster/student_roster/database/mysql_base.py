from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional

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


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Unsupported document value type: {type(value)!r}")


def dump_json_body(fields: Dict[str, Any]) -> str:
    """Serialize a document body; dates are stored as ISO strings."""
    return json.dumps(fields, default=_json_default, ensure_ascii=False)


def load_json_body(value: Any) -> Dict[str, Any]:
    """Normalize MySQL JSON column values across connector implementations.

    mysql-connector can return JSON columns as str, bytes/bytearray or an
    already-decoded dict.
    """

    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        decoded = json.loads(value) if value.strip() else {}
        if not isinstance(decoded, dict):
            raise ValueError(f"Document body is not an object: {value[:40]!r}")
        return decoded
    raise TypeError(f"Unsupported MySQL JSON value type: {type(value)!r}")

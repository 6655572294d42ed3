from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_body, fetchall, fetchone, load_json_body
from .repository import Document, RecordStore

logger = logging.getLogger(__name__)


def _with_id(doc_id: str, body: Document) -> Document:
    doc = dict(body)
    doc.pop("id", None)
    return {"id": doc_id, **doc}


class MySQLRecordStore(RecordStore):
    """Document collections stored as JSON bodies in a single ``documents`` table."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def _cursor(self, action: str, collection: str):
        try:
            with db_cursor(self._conn_factory) as (conn, cur):
                yield conn, cur
        except (mysql.connector.Error, ValueError, TypeError) as e:
            logger.error("Record store %s on %r failed: %s", action, collection, e)
            raise StoreError(f"Could not {action} {collection}") from e

    def list_all(self, collection: str) -> Sequence[Document]:
        with self._cursor("list", collection) as (_, cur):
            cur.execute(
                """
                SELECT doc_id, body
                FROM documents
                WHERE collection=%s
                ORDER BY created_at ASC, doc_id ASC
                """,
                (collection,),
            )
            rows = fetchall(cur)
            return [_with_id(r["doc_id"], load_json_body(r["body"])) for r in rows]

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._cursor("read", collection) as (_, cur):
            cur.execute(
                "SELECT doc_id, body FROM documents WHERE collection=%s AND doc_id=%s",
                (collection, doc_id),
            )
            row = fetchone(cur)
            if not row:
                return None
            return _with_id(row["doc_id"], load_json_body(row["body"]))

    def create(self, collection: str, fields: Document) -> str:
        doc_id = uuid.uuid4().hex
        body = {k: v for k, v in fields.items() if k != "id"}
        with self._cursor("create", collection) as (_, cur):
            cur.execute(
                "INSERT INTO documents(doc_id, collection, body) VALUES(%s,%s,%s)",
                (doc_id, collection, dump_json_body(body)),
            )
        return doc_id

    def update(self, collection: str, doc_id: str, fields: Document) -> None:
        with self._cursor("update", collection) as (_, cur):
            cur.execute(
                "SELECT body FROM documents WHERE collection=%s AND doc_id=%s FOR UPDATE",
                (collection, doc_id),
            )
            row = fetchone(cur)
            if not row:
                raise StoreError(f"No document {doc_id!r} in {collection}")
            body = load_json_body(row["body"])
            for key, value in fields.items():
                if key == "id":
                    continue
                if value is None:
                    body.pop(key, None)
                else:
                    body[key] = value
            cur.execute(
                "UPDATE documents SET body=%s WHERE collection=%s AND doc_id=%s",
                (dump_json_body(body), collection, doc_id),
            )

    def delete(self, collection: str, doc_id: str) -> None:
        with self._cursor("delete", collection) as (_, cur):
            cur.execute("DELETE FROM documents WHERE collection=%s AND doc_id=%s", (collection, doc_id))

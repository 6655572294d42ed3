from __future__ import annotations

import json
from datetime import date

import mysql.connector
import pytest

from src.student_roster.student_roster.core.exceptions import StoreError
from src.student_roster.student_roster.database.bootstrap import iter_sql_statements
from src.student_roster.student_roster.database.mysql_base import dump_json_body, load_json_body
from src.student_roster.student_roster.store.mysql_record_store import MySQLRecordStore


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn

    def execute(self, sql, params=()):
        self._conn.executed.append((" ".join(sql.split()), params))

    def fetchone(self):
        return self._conn.rows.pop(0) if self._conn.rows else None

    def fetchall(self):
        rows, self._conn.rows = self._conn.rows, []
        return rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self, rows=None):
        self.rows = list(rows or [])
        self.executed = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self, conn=None, error=None):
        self.conn = conn or FakeConnection()
        self.error = error

    def connect(self, *, with_database=True):
        if self.error:
            raise self.error
        return self.conn


def test_list_all_injects_ids_and_decodes_bodies():
    conn = FakeConnection(
        rows=[
            {"doc_id": "a", "body": '{"name": "Mina", "id": "stale"}'},
            {"doc_id": "b", "body": b'{"name": "Mariam"}'},
            {"doc_id": "c", "body": {"name": "Youssef"}},
        ]
    )
    store = MySQLRecordStore(FakeConnectionFactory(conn))

    docs = store.list_all("students")

    assert docs == [{"id": "a", "name": "Mina"}, {"id": "b", "name": "Mariam"}, {"id": "c", "name": "Youssef"}]
    assert conn.executed[0][1] == ("students",)
    assert conn.closed


def test_create_assigns_hex_id_and_strips_id_field():
    conn = FakeConnection()
    store = MySQLRecordStore(FakeConnectionFactory(conn))

    doc_id = store.create("attendance", {"id": "ignored", "studentId": "s1", "present": True})

    sql, params = conn.executed[0]
    assert sql.startswith("INSERT INTO documents")
    assert len(doc_id) == 32 and params[0] == doc_id
    assert json.loads(params[2]) == {"studentId": "s1", "present": True}
    assert conn.committed


def test_get_missing_document_returns_none():
    store = MySQLRecordStore(FakeConnectionFactory(FakeConnection()))

    assert store.get("students", "nope") is None


def test_update_merges_fields_into_existing_body():
    conn = FakeConnection(rows=[{"body": '{"name": "Mina", "phone": "01012345678"}'}])
    store = MySQLRecordStore(FakeConnectionFactory(conn))

    store.update("students", "a", {"name": "Mina Adel"})

    sql, params = conn.executed[-1]
    assert sql.startswith("UPDATE documents SET body")
    assert json.loads(params[0]) == {"name": "Mina Adel", "phone": "01012345678"}


def test_update_missing_document_raises_and_rolls_back():
    conn = FakeConnection()
    store = MySQLRecordStore(FakeConnectionFactory(conn))

    with pytest.raises(StoreError):
        store.update("students", "nope", {"name": "x"})

    assert conn.rolled_back
    assert not conn.committed


def test_driver_errors_become_store_errors():
    store = MySQLRecordStore(FakeConnectionFactory(error=mysql.connector.Error("connection refused")))

    with pytest.raises(StoreError, match="Could not list students"):
        store.list_all("students")


def test_corrupt_body_becomes_store_error():
    store = MySQLRecordStore(FakeConnectionFactory(FakeConnection(rows=[{"doc_id": "a", "body": "[1, 2]"}])))

    with pytest.raises(StoreError):
        store.list_all("students")


def test_json_body_helpers():
    assert json.loads(dump_json_body({"dateOfBirth": date(2010, 4, 2)})) == {"dateOfBirth": "2010-04-02"}
    assert load_json_body(None) == {}
    assert load_json_body("  ") == {}
    with pytest.raises(TypeError):
        load_json_body(42)


def test_schema_splitter_skips_comments_and_respects_quotes():
    sql = """
    -- documents
    CREATE TABLE a (x VARCHAR(8) DEFAULT 'a;b');
    INSERT INTO a VALUES ("c;d");
    """

    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (x VARCHAR(8) DEFAULT 'a;b')",
        'INSERT INTO a VALUES ("c;d")',
    ]


def test_update_with_none_removes_the_field():
    conn = FakeConnection(rows=[{"body": '{"name": "Mina", "mobile": "01012345678"}'}])
    store = MySQLRecordStore(FakeConnectionFactory(conn))

    store.update("students", "a", {"phone": "", "mobile": None, "dob": None})

    _, params = conn.executed[-1]
    assert json.loads(params[0]) == {"name": "Mina", "phone": ""}

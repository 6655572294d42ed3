from __future__ import annotations

from datetime import date, datetime

import pytest

from src.student_roster.student_roster.attendance.service import AttendanceService
from src.student_roster.student_roster.attendance.store_attendance_repository import StoreAttendanceRepository
from src.student_roster.student_roster.core.exceptions import StoreError, ValidationError
from src.student_roster.student_roster.students.store_student_repository import StoreStudentRepository

NOW = datetime(2025, 3, 1, 10, 15)


@pytest.fixture
def attendance(store):
    store.put("students", "s1", {"name": "Mina"})
    store.put("students", "s2", {"name": "Mariam"})
    store.put("students", "s3", {"name": "Youssef"})
    return AttendanceService(StoreAttendanceRepository(store), StoreStudentRepository(store))


def _records(store):
    return store.list_all("attendance")


def test_record_scan_writes_presence(attendance, store):
    assert attendance.record_scan(" s1 ", now=NOW) == "Mina"

    [doc] = _records(store)
    assert doc["studentId"] == "s1"
    assert doc["present"] is True
    assert doc["date"] == "2025-03-01T10:15:00"


def test_second_scan_on_the_same_day_is_rejected(attendance, store):
    attendance.record_scan("s1", now=NOW)

    with pytest.raises(ValidationError, match="already marked present"):
        attendance.record_scan("s1", now=NOW.replace(hour=18))

    assert len(_records(store)) == 1


def test_scan_on_the_next_day_is_accepted(attendance, store):
    attendance.record_scan("s1", now=NOW)
    attendance.record_scan("s1", now=datetime(2025, 3, 2, 9, 0))

    assert len(_records(store)) == 2


@pytest.mark.parametrize("payload, message", [("", "QR code is empty"), ("   ", "QR code is empty"), ("zzz", "does not match")])
def test_bad_payloads(attendance, payload, message):
    with pytest.raises(ValidationError, match=message):
        attendance.record_scan(payload, now=NOW)


def test_store_failure_propagates(attendance, store):
    store.failing.add("create")

    with pytest.raises(StoreError):
        attendance.record_scan("s1", now=NOW)


def test_close_day_marks_everyone_without_a_record(attendance, store):
    attendance.record_scan("s1", now=NOW)

    marked = attendance.close_day(date(2025, 3, 1), now=NOW)

    assert marked == 2
    absent = {d["studentId"]: d for d in _records(store) if not d["present"]}
    assert set(absent) == {"s2", "s3"}
    assert absent["s2"]["date"] == "2025-03-01T23:59:00"


def test_close_day_twice_writes_nothing_new(attendance, store):
    attendance.close_day(date(2025, 3, 1), now=NOW)

    assert attendance.close_day(date(2025, 3, 1), now=NOW) == 0
    assert len(_records(store)) == 3


def test_close_day_rejects_future_days(attendance):
    with pytest.raises(ValidationError, match="future"):
        attendance.close_day(date(2025, 3, 2), now=NOW)

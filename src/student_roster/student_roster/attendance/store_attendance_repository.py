from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Sequence

from ..common.datetime_utils import parse_date
from ..core.constants import ATTENDANCE_COLLECTION
from ..store.repository import RecordStore
from .model import AttendanceRecord
from .repository import AttendanceRepository


def attendance_from_document(doc: Mapping[str, Any]) -> AttendanceRecord:
    student_id = doc.get("studentId")
    return AttendanceRecord(
        record_id=str(doc.get("id") or ""),
        student_id="" if student_id is None else str(student_id),
        date=parse_date(doc.get("date")),
        present=bool(doc.get("present")),
    )


class StoreAttendanceRepository(AttendanceRepository):
    def __init__(self, store: RecordStore, *, collection: str = ATTENDANCE_COLLECTION):
        self._store = store
        self._collection = collection

    def list_all(self) -> Sequence[AttendanceRecord]:
        return [attendance_from_document(d) for d in self._store.list_all(self._collection)]

    def create(self, *, student_id: str, when: datetime, present: bool) -> str:
        return self._store.create(
            self._collection,
            {"studentId": student_id, "date": when.isoformat(timespec="seconds"), "present": bool(present)},
        )

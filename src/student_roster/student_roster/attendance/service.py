from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import calendar_day, now_local
from ..core.exceptions import ValidationError
from ..students.repository import StudentRepository
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: record a QR check-in, close a day by marking the missing students absent."""

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    def _ids_on(self, day: date, *, present_only: bool) -> set[str]:
        return {
            r.student_id
            for r in self._attendance.list_all()
            if r.date is not None and calendar_day(r.date) == day and (r.present or not present_only)
        }

    def record_scan(self, payload: str, *, now: Optional[datetime] = None) -> str:
        """Mark the student encoded in a QR payload present; returns the student's name."""
        now = now or now_local()
        student_id = (payload or "").strip()
        if not student_id:
            raise ValidationError("QR code is empty")

        student = self._students.get_by_id(student_id)
        if not student:
            raise ValidationError("QR code does not match any student")

        if student_id in self._ids_on(now.date(), present_only=True):
            raise ValidationError(f"{student.name or student_id} is already marked present today")

        self._attendance.create(student_id=student_id, when=now, present=True)
        logger.info("Recorded presence of %s at %s", student_id, now.isoformat(timespec="seconds"))
        return student.name

    def close_day(self, day: date, *, now: Optional[datetime] = None) -> int:
        """Write an absence record for every student with no record at all on ``day``."""
        if day > (now or now_local()).date():
            raise ValidationError("Cannot close a day in the future")

        recorded = self._ids_on(day, present_only=False)
        when = datetime.combine(day, time(23, 59))
        marked = 0
        for s in self._students.list_all():
            if s.student_id in recorded:
                continue
            self._attendance.create(student_id=s.student_id, when=when, present=False)
            marked += 1
        logger.info("Closed %s: %d absent", day.isoformat(), marked)
        return marked

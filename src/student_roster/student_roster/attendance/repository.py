from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(self, *, student_id: str, when: datetime, present: bool) -> str:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one presence/absence mark for a student on a day."""

    record_id: str
    student_id: str
    date: Optional[datetime]
    present: bool


@dataclass(frozen=True)
class AttendeeRank:
    """Read-model for the top-attendees widget."""

    student_id: str
    name: str
    count: int

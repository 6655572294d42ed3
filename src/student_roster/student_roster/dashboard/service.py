from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional, TypeVar

from ..attendance.aggregator import absentees_for_latest_day, top_attendees
from ..attendance.model import AttendeeRank
from ..attendance.repository import AttendanceRepository
from ..core.constants import (
    DEFAULT_ABSENTEE_LIMIT,
    DEFAULT_BIRTHDAY_WINDOW_DAYS,
    DEFAULT_TOP_ATTENDEES,
    UNKNOWN_LABEL,
)
from ..core.exceptions import StoreError
from ..students.birthdays import UpcomingBirthday, upcoming_birthdays
from ..students.repository import StudentRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class AbsenteeRow:
    student_id: str
    name: str


@dataclass
class DashboardView:
    absentees: List[AbsenteeRow] = field(default_factory=list)
    top_attendees: List[AttendeeRank] = field(default_factory=list)
    birthdays: List[UpcomingBirthday] = field(default_factory=list)
    birthday_window_days: int = DEFAULT_BIRTHDAY_WINDOW_DAYS
    errors: List[str] = field(default_factory=list)


class DashboardService:
    """Builds the three dashboard widgets from fresh store reads."""

    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        *,
        absentee_limit: int = DEFAULT_ABSENTEE_LIMIT,
        top_n: int = DEFAULT_TOP_ATTENDEES,
        birthday_window_days: int = DEFAULT_BIRTHDAY_WINDOW_DAYS,
    ):
        self._students = students
        self._attendance = attendance
        self._absentee_limit = int(absentee_limit)
        self._top_n = int(top_n)
        self._birthday_window_days = int(birthday_window_days)

    def absentees(self) -> List[AbsenteeRow]:
        ids = absentees_for_latest_day(self._attendance.list_all(), limit=self._absentee_limit)
        if not ids:
            return []
        names = {s.student_id: s.name for s in self._students.list_all()}
        return [AbsenteeRow(student_id=i, name=names.get(i) or UNKNOWN_LABEL) for i in ids]

    def top_attendees(self) -> List[AttendeeRank]:
        return top_attendees(self._attendance.list_all(), self._students.list_all(), top_n=self._top_n)

    def birthdays(self, today: Optional[date] = None) -> List[UpcomingBirthday]:
        return upcoming_birthdays(self._students.list_all(), days=self._birthday_window_days, today=today)

    def build(self, today: Optional[date] = None) -> DashboardView:
        """Each widget loads on its own; a failing one is reported and left empty."""
        view = DashboardView(birthday_window_days=self._birthday_window_days)

        def load(label: str, loader: Callable[[], List[T]]) -> List[T]:
            try:
                return loader()
            except StoreError:
                logger.exception("Loading %s failed", label)
                view.errors.append(f"Could not load {label}")
                return []

        view.absentees = load("absentees", self.absentees)
        view.top_attendees = load("top attendees", self.top_attendees)
        view.birthdays = load("birthdays", lambda: self.birthdays(today))
        return view

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from ..core.constants import FILTER_ALL
from .model import Student

SEARCH_FIELDS = (
    "name",
    "phone",
    "father_phone",
    "mother_phone",
    "church_father_name",
    "year_of_study",
)


@dataclass(frozen=True)
class StudentFilter:
    """Search box plus the two dropdown filters of the roster page."""

    query: str = ""
    gender: str = FILTER_ALL
    student_type: str = FILTER_ALL

    @property
    def is_empty(self) -> bool:
        return not self.query.strip() and _is_all(self.gender) and _is_all(self.student_type)


def _is_all(value: str) -> bool:
    return not value or value.strip().lower() == FILTER_ALL


def _lower(value: object) -> str:
    return ("" if value is None else str(value)).lower()


def _matches_query(student: Student, needle: str) -> bool:
    return any(needle in _lower(getattr(student, name, "")) for name in SEARCH_FIELDS)


def _matches_equal(value: str, wanted: str) -> bool:
    return _is_all(wanted) or _lower(value) == wanted.strip().lower()


def filter_students(students: Iterable[Student], criteria: StudentFilter) -> List[Student]:
    """Return the students matching every active criterion, in input order."""
    needle = (criteria.query or "").strip().lower()
    return [
        s
        for s in students
        if (not needle or _matches_query(s, needle))
        and _matches_equal(s.gender, criteria.gender)
        and _matches_equal(s.student_type, criteria.student_type)
    ]

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from ..common.datetime_utils import parse_date
from ..common.snapshot import Snapshot
from ..common.validators import require_choice, require_non_empty, require_phone
from ..core.enums import Gender, StudentType, YearOfStudy
from ..core.exceptions import StoreError, ValidationError
from .filtering import StudentFilter, filter_students
from .model import Student, StudentForm
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use cases of the roster page: list/search, create, update, delete."""

    def __init__(self, students: StudentRepository):
        self._students = students
        self._snapshot: Snapshot[Student] = Snapshot()

    @property
    def snapshot(self) -> Sequence[Student]:
        return self._snapshot.items

    def refresh(self) -> Sequence[Student]:
        """Fetch the roster and replace the snapshot.

        On ``StoreError`` the previous snapshot is left untouched and the error
        propagates to the caller for reporting.
        """
        generation = self._snapshot.begin()
        try:
            fetched = self._students.list_all()
        except StoreError:
            logger.exception("Fetching students failed; keeping %d cached", len(self._snapshot.items))
            raise
        if not self._snapshot.apply(generation, fetched):
            logger.debug("Discarding stale roster fetch (generation %d)", generation)
        return self._snapshot.items

    def search(self, criteria: StudentFilter) -> list[Student]:
        return filter_students(self._snapshot.items, criteria)

    def get(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise ValidationError("Student not found")
        return student

    def validate(self, form: StudentForm) -> StudentForm:
        name = require_non_empty(form.name, "Name")
        phone = require_phone(form.phone, "Phone")
        father_phone = require_phone(form.father_phone, "Father's phone")
        mother_phone = require_phone(form.mother_phone, "Mother's phone")
        if form.date_of_birth and parse_date(form.date_of_birth) is None:
            raise ValidationError("Date of birth is not a valid date")
        require_choice(form.gender, "Gender", Gender)
        require_choice(form.student_type, "Student type", StudentType)
        require_choice(form.year_of_study, "Year of study", YearOfStudy)
        return replace(form, name=name, phone=phone, father_phone=father_phone, mother_phone=mother_phone)

    def save(self, form: StudentForm, *, student_id: Optional[str] = None) -> str:
        """Create a student, or update ``student_id`` when given. Returns the id."""
        form = self.validate(form)
        if student_id:
            self._students.update(student_id, form)
            logger.info("Updated student %s", student_id)
            return student_id

        new_id = self._students.create(form)
        logger.info("Created student %s", new_id)
        return new_id

    def delete(self, student_id: str) -> None:
        if not student_id:
            raise ValidationError("Student not found")
        self._students.delete(student_id)
        logger.info("Deleted student %s", student_id)

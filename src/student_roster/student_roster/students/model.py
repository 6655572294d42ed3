from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Mapping, Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: one roster entry in canonical (alias-free) form."""

    student_id: str
    name: str = ""
    phone: str = ""
    father_phone: str = ""
    mother_phone: str = ""
    date_of_birth: Optional[datetime] = None
    year_of_study: str = ""
    church_father_name: str = ""
    address: str = ""
    gender: str = ""
    student_type: str = ""

    @property
    def date_of_birth_iso(self) -> str:
        return self.date_of_birth.strftime("%Y-%m-%d") if self.date_of_birth else ""


@dataclass(frozen=True)
class StudentForm:
    """Raw values submitted by the roster form (create or update)."""

    name: str = ""
    phone: str = ""
    father_phone: str = ""
    mother_phone: str = ""
    date_of_birth: str = ""
    year_of_study: str = ""
    church_father_name: str = ""
    address: str = ""
    gender: str = ""
    student_type: str = ""

    # HTML/JSON field names used by the form and stored documents.
    FIELD_NAMES = {
        "name": "name",
        "phone": "phone",
        "father_phone": "fatherPhone",
        "mother_phone": "motherPhone",
        "date_of_birth": "dateOfBirth",
        "year_of_study": "yearOfStudy",
        "church_father_name": "churchFatherName",
        "address": "address",
        "gender": "gender",
        "student_type": "studentType",
    }

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "StudentForm":
        values = {}
        for f in fields(cls):
            raw = data.get(cls.FIELD_NAMES[f.name])
            values[f.name] = "" if raw is None else str(raw).strip()
        return cls(**values)

    @classmethod
    def from_student(cls, student: Student) -> "StudentForm":
        return cls(
            name=student.name,
            phone=student.phone,
            father_phone=student.father_phone,
            mother_phone=student.mother_phone,
            date_of_birth=student.date_of_birth_iso,
            year_of_study=student.year_of_study,
            church_father_name=student.church_father_name,
            address=student.address,
            gender=student.gender,
            student_type=student.student_type,
        )

    def to_document(self) -> dict:
        return {self.FIELD_NAMES[f.name]: getattr(self, f.name) for f in fields(self)}

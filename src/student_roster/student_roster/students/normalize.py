"""Ingestion boundary for roster documents.

Older documents use different names for the same logical field. They are
resolved here, once, so the rest of the code only sees :class:`Student`.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..common.datetime_utils import parse_date
from .model import Student

FIELD_ALIASES: dict[str, Sequence[str]] = {
    "name": ("name", "fullName"),
    "phone": ("phone", "mobile"),
    "father_phone": ("fatherPhone",),
    "mother_phone": ("motherPhone",),
    "date_of_birth": ("dateOfBirth", "dob", "DOB"),
    "year_of_study": ("yearOfStudy",),
    "church_father_name": ("churchFatherName",),
    "address": ("address",),
    "gender": ("gender",),
    "student_type": ("studentType", "type", "student_type"),
}

# Keys that only older documents carry; rewriting a student drops them.
LEGACY_KEYS = tuple(alias for aliases in FIELD_ALIASES.values() for alias in aliases[1:])


def _first_present(doc: Mapping[str, Any], aliases: Sequence[str]) -> Any:
    for key in aliases:
        value = doc.get(key)
        if value not in (None, ""):
            return value
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def student_from_document(doc: Mapping[str, Any]) -> Student:
    values = {field: _first_present(doc, aliases) for field, aliases in FIELD_ALIASES.items()}
    return Student(
        student_id=_text(doc.get("id")),
        name=_text(values["name"]),
        phone=_text(values["phone"]),
        father_phone=_text(values["father_phone"]),
        mother_phone=_text(values["mother_phone"]),
        date_of_birth=parse_date(values["date_of_birth"]),
        year_of_study=_text(values["year_of_study"]),
        church_father_name=_text(values["church_father_name"]),
        address=_text(values["address"]),
        gender=_text(values["gender"]).lower(),
        student_type=_text(values["student_type"]).lower(),
    )

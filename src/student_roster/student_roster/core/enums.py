from __future__ import annotations

from enum import Enum


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class StudentType(str, Enum):
    """Whether a student is new this season or returning."""

    NEW = "new"
    RETURNING = "returning"


class YearOfStudy(str, Enum):
    """Grade labels offered by the roster form (stored verbatim)."""

    PRIMARY_1 = "الصف الأول الابتدائي"
    PRIMARY_2 = "الصف الثاني الابتدائي"
    PRIMARY_3 = "الصف الثالث الابتدائي"
    PRIMARY_4 = "الصف الرابع الابتدائي"
    PRIMARY_5 = "الصف الخامس الابتدائي"
    PRIMARY_6 = "الصف السادس الابتدائي"
    PREPARATORY_1 = "الصف الأول الإعدادي"
    PREPARATORY_2 = "الصف الثاني الإعدادي"
    PREPARATORY_3 = "الصف الثالث الإعدادي"
    SECONDARY_1 = "الصف الأول الثانوي"
    SECONDARY_2 = "الصف الثاني الثانوي"
    SECONDARY_3 = "الصف الثالث الثانوي"
    UNIVERSITY = "المرحلة الجامعية"
    GRADUATE = "خريج"


class ScanState(str, Enum):
    """Lifecycle states of a QR capture session."""

    IDLE = "IDLE"
    INITIALIZING = "INITIALIZING"
    CAMERA_AVAILABLE = "CAMERA_AVAILABLE"
    NO_CAMERA_FALLBACK = "NO_CAMERA_FALLBACK"
    SCANNING = "SCANNING"
    DECODED = "DECODED"
    FAILED = "FAILED"
    STOPPED = "STOPPED"

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.constants import ATTENDANCE_COLLECTION, STUDENTS_COLLECTION
from ..core.enums import Gender, StudentType, YearOfStudy
from ..store.repository import RecordStore

logger = logging.getLogger(__name__)

DEMO_STUDENTS = [
    {
        "name": "Mina Samir",
        "phone": "01012345678",
        "fatherPhone": "01112345678",
        "motherPhone": "",
        "dateOfBirth": "2012-03-14",
        "yearOfStudy": YearOfStudy.PREPARATORY_1.value,
        "churchFatherName": "Fr. Bishoy",
        "address": "Shubra",
        "gender": Gender.MALE.value,
        "studentType": StudentType.RETURNING.value,
    },
    {
        "name": "Marina Adel",
        "phone": "01212345678",
        "fatherPhone": "",
        "motherPhone": "01512345678",
        "dateOfBirth": "2014-11-02",
        "yearOfStudy": YearOfStudy.PRIMARY_5.value,
        "churchFatherName": "Fr. Antonios",
        "address": "Heliopolis",
        "gender": Gender.FEMALE.value,
        "studentType": StudentType.NEW.value,
    },
    {
        "name": "Kirollos Nabil",
        "phone": "01512340000",
        "fatherPhone": "01012340000",
        "motherPhone": "01112340000",
        "dateOfBirth": "2009-07-21",
        "yearOfStudy": YearOfStudy.SECONDARY_1.value,
        "churchFatherName": "Fr. Bishoy",
        "address": "Nasr City",
        "gender": Gender.MALE.value,
        "studentType": StudentType.RETURNING.value,
    },
]


def seed_demo_roster(store: RecordStore, *, today: Optional[date] = None, days: int = 3) -> int:
    """Insert demo students plus a few days of attendance; skipped if students exist."""
    if store.list_all(STUDENTS_COLLECTION):
        logger.info("Roster already has students, skipping demo seed")
        return 0

    today = today or date.today()
    ids = [store.create(STUDENTS_COLLECTION, doc) for doc in DEMO_STUDENTS]

    for offset in range(days, 0, -1):
        day = today - timedelta(days=offset)
        for i, student_id in enumerate(ids):
            present = (i + offset) % 3 != 0
            when = datetime.combine(day, time(10, 0)) + timedelta(minutes=i)
            store.create(
                ATTENDANCE_COLLECTION,
                {"studentId": student_id, "date": when.isoformat(timespec="seconds"), "present": present},
            )
    logger.info("Seeded %d demo students", len(ids))
    return len(ids)

"""Pure aggregations behind the attendance widgets of the dashboard."""
from __future__ import annotations

from typing import Dict, Iterable, List

from ..common.datetime_utils import calendar_day
from ..core.constants import DEFAULT_ABSENTEE_LIMIT, DEFAULT_TOP_ATTENDEES, UNKNOWN_LABEL
from ..students.model import Student
from .model import AttendanceRecord, AttendeeRank


def absentees_for_latest_day(
    records: Iterable[AttendanceRecord],
    *,
    limit: int = DEFAULT_ABSENTEE_LIMIT,
) -> List[str]:
    """Student ids marked absent on the most recent recorded calendar day.

    Records without a date are ignored. Order follows the descending date sort
    (stable), and the result is truncated to ``limit``.
    """
    dated = [r for r in records if r.date is not None]
    if not dated:
        return []

    dated.sort(key=lambda r: r.date, reverse=True)
    last_day = calendar_day(dated[0].date)
    absent = [r.student_id for r in dated if calendar_day(r.date) == last_day and not r.present]
    return absent[:limit]


def top_attendees(
    records: Iterable[AttendanceRecord],
    students: Iterable[Student],
    *,
    top_n: int = DEFAULT_TOP_ATTENDEES,
) -> List[AttendeeRank]:
    """Rank students by number of presence records across all history.

    Equal counts keep the order in which students were first seen; no
    secondary ordering by name is applied.
    """
    names = {s.student_id: s.name or UNKNOWN_LABEL for s in students}

    counts: Dict[str, int] = {}
    for r in records:
        if r.present and r.student_id:
            counts[r.student_id] = counts.get(r.student_id, 0) + 1

    ranked = [AttendeeRank(student_id=sid, name=names.get(sid, UNKNOWN_LABEL), count=c) for sid, c in counts.items()]
    ranked.sort(key=lambda a: a.count, reverse=True)
    return ranked[:top_n]

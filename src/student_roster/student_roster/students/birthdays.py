from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Union

from ..common.datetime_utils import calculate_age, days_until_next_anniversary
from ..core.constants import DEFAULT_BIRTHDAY_WINDOW_DAYS
from .model import Student


@dataclass(frozen=True)
class UpcomingBirthday:
    student: Student
    age: Union[int, str]
    days_left: int


def upcoming_birthdays(
    students: Iterable[Student],
    *,
    days: int = DEFAULT_BIRTHDAY_WINDOW_DAYS,
    today: Optional[date] = None,
) -> List[UpcomingBirthday]:
    today = today or date.today()
    out: List[UpcomingBirthday] = []
    for s in students:
        left = days_until_next_anniversary(s.date_of_birth, today)
        if left == math.inf or not 0 <= left <= days:
            continue
        out.append(UpcomingBirthday(student=s, age=calculate_age(s.date_of_birth, today), days_left=int(left)))
    out.sort(key=lambda b: b.days_left)
    return out

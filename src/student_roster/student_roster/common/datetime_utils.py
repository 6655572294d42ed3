"""Date helpers shared by the roster and the dashboard widgets.

Stored documents carry dates in several shapes: ISO strings written by the
roster form, ``{"seconds": ...}`` mappings exported from timestamp-aware
stores, and native ``datetime`` values handed back by drivers. Everything is
funnelled through :func:`parse_date` into a naive local ``datetime``.
"""
from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Any, Optional, Union

from ..core.constants import AGE_TURNING_THIS_YEAR_OFFSET, UNKNOWN_LABEL

_CONVERSION_METHODS = ("to_datetime", "to_date", "toDate")


def _naive_local(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def _from_iso(value: str) -> Optional[datetime]:
    value = value.strip()
    if not value:
        return None
    try:
        return _naive_local(datetime.fromisoformat(value))
    except ValueError:
        pass
    try:
        return datetime.combine(date.fromisoformat(value[:10]), time.min)
    except ValueError:
        return None


def _from_epoch(seconds: float) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(seconds)
    except (OverflowError, OSError, ValueError):
        return None


def parse_date(value: Any) -> Optional[datetime]:
    """Normalize a stored date representation, or return None when impossible."""
    if value is None or value == "":
        return None

    for name in _CONVERSION_METHODS:
        method = getattr(value, name, None)
        if callable(method):
            try:
                converted = method()
            except (TypeError, ValueError):
                return None
            if converted is value:
                return None
            return parse_date(converted)

    seconds = value.get("seconds") if isinstance(value, dict) else getattr(value, "seconds", None)
    if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
        return _from_epoch(seconds)

    if isinstance(value, str):
        return _from_iso(value)
    if isinstance(value, datetime):
        return _naive_local(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)

    # Generic coercion: bare numbers are epoch milliseconds.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _from_epoch(value / 1000)
    try:
        return _from_iso(str(value))
    except Exception:
        return None


def calendar_day(value: datetime) -> date:
    return value.date()


def _anniversary(year: int, birth: datetime) -> date:
    try:
        return date(year, birth.month, birth.day)
    except ValueError:
        # 29 February outside a leap year rolls over to 1 March.
        return date(year, 3, 1)


def calculate_age(dob: Any, today: Optional[date] = None) -> Union[int, str]:
    """Age in whole years, counting the birthday of the current year.

    The result is the naive year difference plus
    ``AGE_TURNING_THIS_YEAR_OFFSET``, minus one while the birthday has not been
    reached yet. Unparseable input yields ``"Unknown"``.
    """
    birth = parse_date(dob)
    if birth is None:
        return UNKNOWN_LABEL
    today = today or date.today()

    age = today.year - birth.year + AGE_TURNING_THIS_YEAR_OFFSET
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age


def days_until_next_anniversary(dob: Any, today: Optional[date] = None) -> Union[int, float]:
    birth = parse_date(dob)
    if birth is None:
        return math.inf
    today = today or date.today()
    if isinstance(today, datetime):
        today = today.date()

    upcoming = _anniversary(today.year, birth)
    if upcoming < today:
        upcoming = _anniversary(today.year + 1, birth)
    return math.ceil((upcoming - today).total_seconds() / 86400)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()

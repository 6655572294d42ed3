from __future__ import annotations

import re
from typing import Optional

from ..core.constants import PHONE_PATTERN
from ..core.exceptions import ValidationError

_PHONE_RE = re.compile(PHONE_PATTERN)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def is_valid_phone(value: str) -> bool:
    """True for an 11-digit number starting with 010, 011, 012 or 015."""
    return bool(_PHONE_RE.fullmatch(value or ""))


def require_phone(value: Optional[str], label: str) -> str:
    """Validate an optional phone field; empty values pass through as ''."""
    value = (value or "").strip()
    if value and not is_valid_phone(value):
        raise ValidationError(f"{label} must start with 010, 011, 012, or 015 and be 11 digits.")
    return value


def require_choice(value: Optional[str], field_name: str, choices) -> str:
    """Accept '' or one of the enum values in ``choices``."""
    value = (value or "").strip()
    if value and value not in {c.value for c in choices}:
        raise ValidationError(f"{field_name} is not a valid option")
    return value

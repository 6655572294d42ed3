import pytest

from src.student_roster.student_roster.common.validators import (
    is_valid_phone,
    require_choice,
    require_non_empty,
    require_phone,
)
from src.student_roster.student_roster.core.enums import Gender
from src.student_roster.student_roster.core.exceptions import ValidationError


@pytest.mark.parametrize("phone", ["01012345678", "01112345678", "01212345678", "01512345678"])
def test_valid_phone_prefixes(phone):
    assert is_valid_phone(phone)


@pytest.mark.parametrize(
    "phone",
    ["02012345678", "0101234567", "010123456789", "0101234567a", "", "+201012345678", "010١٢٣٤٥٦٧٨", "01012345678\n"],
)
def test_invalid_phones(phone):
    assert not is_valid_phone(phone)


def test_require_phone_allows_empty_and_strips():
    assert require_phone("", "Phone") == ""
    assert require_phone(None, "Phone") == ""
    assert require_phone(" 01012345678 ", "Phone") == "01012345678"


def test_require_phone_reports_the_field_label():
    with pytest.raises(ValidationError) as exc:
        require_phone("02012345678", "Father's phone")
    assert str(exc.value).startswith("Father's phone must start with 010")


def test_require_non_empty():
    assert require_non_empty("  Mina ", "Name") == "Mina"
    with pytest.raises(ValidationError, match="Name is required"):
        require_non_empty("   ", "Name")


def test_require_choice():
    assert require_choice("male", "Gender", Gender) == "male"
    assert require_choice("", "Gender", Gender) == ""
    with pytest.raises(ValidationError):
        require_choice("other", "Gender", Gender)

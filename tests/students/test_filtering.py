from src.student_roster.student_roster.students.filtering import StudentFilter, filter_students
from src.student_roster.student_roster.students.model import Student

ROSTER = [
    Student("s1", name="Mina Adel", phone="01012345678", gender="male", student_type="new", year_of_study="الصف الأول الثانوي"),
    Student("s2", name="Mariam Fady", phone="01298765432", gender="female", student_type="returning", church_father_name="Abouna Bishoy"),
    Student("s3", name="Youssef", gender="male", student_type="returning"),
    Student("s4"),
]


def test_empty_criteria_returns_input_unchanged():
    assert filter_students(ROSTER, StudentFilter()) == ROSTER
    assert StudentFilter().is_empty


def test_query_is_trimmed_and_case_insensitive():
    assert [s.student_id for s in filter_students(ROSTER, StudentFilter(query="  MINA "))] == ["s1"]


def test_query_matches_phone_and_church_father():
    assert [s.student_id for s in filter_students(ROSTER, StudentFilter(query="0129"))] == ["s2"]
    assert [s.student_id for s in filter_students(ROSTER, StudentFilter(query="bishoy"))] == ["s2"]


def test_query_matches_year_of_study_label():
    assert [s.student_id for s in filter_students(ROSTER, StudentFilter(query="الثانوي"))] == ["s1"]


def test_equality_filters_compose_with_and():
    result = filter_students(ROSTER, StudentFilter(gender="male", student_type="returning"))
    assert [s.student_id for s in result] == ["s3"]


def test_filter_value_is_case_insensitive_and_all_is_a_sentinel():
    assert [s.student_id for s in filter_students(ROSTER, StudentFilter(gender="FEMALE"))] == ["s2"]
    assert filter_students(ROSTER, StudentFilter(gender="All", student_type="all")) == ROSTER


def test_missing_fields_behave_as_empty_strings():
    assert filter_students([Student("s4")], StudentFilter(query="x")) == []
    assert filter_students([Student("s4")], StudentFilter(gender="male")) == []


def test_filtering_is_idempotent_and_order_preserving():
    criteria = StudentFilter(query="s", gender="all", student_type="returning")
    once = filter_students(ROSTER, criteria)

    assert filter_students(once, criteria) == once
    assert [s.student_id for s in once] == ["s2", "s3"]

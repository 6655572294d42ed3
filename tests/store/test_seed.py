from datetime import date

from src.student_roster.student_roster.database.connection import DBConfig
from src.student_roster.student_roster.database.seed import DEMO_STUDENTS, seed_demo_roster


def test_seed_creates_students_and_attendance(store):
    assert seed_demo_roster(store, today=date(2025, 3, 1), days=3) == len(DEMO_STUDENTS)

    assert len(store.list_all("students")) == len(DEMO_STUDENTS)
    records = store.list_all("attendance")
    assert len(records) == 3 * len(DEMO_STUDENTS)
    assert {r["date"][:10] for r in records} == {"2025-02-26", "2025-02-27", "2025-02-28"}
    assert any(not r["present"] for r in records)


def test_seed_is_skipped_when_students_exist(store):
    store.put("students", "s1", {"name": "Existing"})

    assert seed_demo_roster(store) == 0
    assert store.list_all("attendance") == []


def test_db_config_from_dict_defaults():
    cfg = DBConfig.from_dict({"host": "db", "port": "3307"})

    assert cfg.host == "db"
    assert cfg.port == 3307
    assert cfg.database == "student_roster"
    assert cfg.connection_timeout == 10

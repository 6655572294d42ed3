from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.student_roster.student_roster.database.connection import DBConfig, DatabaseConnection
from src.student_roster.student_roster.database.seed import seed_demo_roster
from src.student_roster.student_roster.store.mysql_record_store import MySQLRecordStore


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    store = MySQLRecordStore(DatabaseConnection(DBConfig.from_dict(db_config)))
    created = seed_demo_roster(store)

    print(
        f"OK: Seeded {created} student(s) -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()

"""Example: use the service layer without Flask.

Controllers are thin; the dashboard widgets can be computed from a script.
"""

import importlib

from config import get_settings_module

from src.student_roster.student_roster.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    view = container.dashboard_service.build()
    for rank in view.top_attendees:
        print(f"{rank.name}: {rank.count}")
    for b in view.birthdays:
        print(f"{b.student.name} turns {b.age} in {b.days_left} day(s)")


if __name__ == "__main__":
    main()

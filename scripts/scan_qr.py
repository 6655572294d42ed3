"""Kiosk scanner: mark students present from a camera attached to this machine.

Runs one capture session per student until interrupted with Ctrl+C.
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.student_roster.student_roster.container import build_container
from src.student_roster.student_roster.core.exceptions import CameraError, StoreError, ValidationError
from src.student_roster.student_roster.main import configure_logging

logger = logging.getLogger("scan_qr")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    def on_scan(text: str) -> None:
        try:
            name = container.attendance_service.record_scan(text)
            print(f"OK: {name or text} marked present")
        except ValidationError as e:
            print(f"SKIP: {e}")
        except StoreError:
            print("ERROR: could not save attendance, try again")

    print("Show a student QR code to the camera (Ctrl+C to stop)")
    while True:
        session = container.new_scan_session(on_scan)
        try:
            with session:
                session.run()
        except CameraError as e:
            raise SystemExit(f"Failed to initialize QR scanner: {e}")
        except KeyboardInterrupt:
            print("Stopped.")
            return


if __name__ == "__main__":
    main()

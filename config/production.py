import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "student_roster"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

BIRTHDAY_WINDOW_DAYS = int(os.getenv("BIRTHDAY_WINDOW_DAYS", "3"))
TOP_ATTENDEES_LIMIT = int(os.getenv("TOP_ATTENDEES_LIMIT", "8"))
ABSENTEE_LIMIT = int(os.getenv("ABSENTEE_LIMIT", "10"))

QR_SCAN_MAX_FRAMES = int(os.getenv("QR_SCAN_MAX_FRAMES", "300"))
QR_CAMERA_PROBE_LIMIT = int(os.getenv("QR_CAMERA_PROBE_LIMIT", "4"))

import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "student_roster"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo students on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Dashboard widgets
BIRTHDAY_WINDOW_DAYS = int(os.getenv("BIRTHDAY_WINDOW_DAYS", "3"))
TOP_ATTENDEES_LIMIT = int(os.getenv("TOP_ATTENDEES_LIMIT", "8"))
ABSENTEE_LIMIT = int(os.getenv("ABSENTEE_LIMIT", "10"))

# Server-side camera scanning
QR_SCAN_MAX_FRAMES = int(os.getenv("QR_SCAN_MAX_FRAMES", "300"))
QR_CAMERA_PROBE_LIMIT = int(os.getenv("QR_CAMERA_PROBE_LIMIT", "4"))

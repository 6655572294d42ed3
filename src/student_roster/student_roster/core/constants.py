"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STUDENTS_COLLECTION = "students"
ATTENDANCE_COLLECTION = "attendance"

FILTER_ALL = "all"
UNKNOWN_LABEL = "Unknown"

PHONE_PATTERN = r"(010|011|012|015)[0-9]{8}"

DEFAULT_ABSENTEE_LIMIT = 10
DEFAULT_TOP_ATTENDEES = 8
DEFAULT_BIRTHDAY_WINDOW_DAYS = 3

# Ages are reported as the age a student turns during the current year.
AGE_TURNING_THIS_YEAR_OFFSET = 1

QR_CAMERA_LABEL_PATTERN = r"back|rear|environment"
DEFAULT_QR_SCAN_MAX_FRAMES = 300
DEFAULT_QR_CAMERA_PROBE_LIMIT = 4

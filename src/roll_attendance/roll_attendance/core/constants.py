"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

TABLE_NAME = "Attendees"
DEFAULT_DB_NAME = "attendees.db"

CSV_HEADER = ("RollNo", "Marked")
EXPORT_FILENAME = "attendance_export.csv"

BACKEND_SQLITE = "sqlite"
BACKEND_MYSQL = "mysql"

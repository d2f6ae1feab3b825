import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# backend: "sqlite" (local file, default) or "mysql"
DB_CONFIG = {
    "backend": os.getenv("DB_BACKEND", "sqlite"),
    "path": os.getenv("DB_PATH", "instance/attendees.db"),
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

# Seeds an empty store: a RollNo,Marked CSV or a bundled attendees.db
SEED_SNAPSHOT = os.getenv("SEED_SNAPSHOT", "database/attendees.csv")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

MAX_CONTENT_LENGTH = 16 * 1024 * 1024

import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "backend": "sqlite",
    "path": os.getenv("DB_PATH", ":memory:"),
}

SEED_SNAPSHOT = os.getenv("SEED_SNAPSHOT") or None

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

MAX_CONTENT_LENGTH = 1024 * 1024

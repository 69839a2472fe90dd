import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_portal_test"),
    "connect_timeout": 5,
}

STORAGE_CONFIG = {
    "url": "http://storage.test",
    "key": "test-key",
    "bucket": "attendance",
    "timeout": 5.0,
}

MAX_PHOTO_BYTES = 10 * 1024 * 1024

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False

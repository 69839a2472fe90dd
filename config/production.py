import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_portal"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

STORAGE_CONFIG = {
    "url": os.getenv("STORAGE_URL", ""),
    "key": os.getenv("STORAGE_KEY", ""),
    "bucket": os.getenv("STORAGE_BUCKET", "attendance"),
    "timeout": float(os.getenv("UPLOAD_TIMEOUT_SECONDS", "10")),
}

MAX_PHOTO_BYTES = int(os.getenv("MAX_PHOTO_BYTES", str(10 * 1024 * 1024)))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

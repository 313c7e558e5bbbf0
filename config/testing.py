import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

ALLOW_CONCURRENT_SESSIONS = False
AUTO_CLOCK_OUT_HOURS = 8
WEEKLY_TARGET_HOURS = 40

REMINDER_ENABLED = False
REMINDER_THRESHOLD_MINUTES = 470
REMINDER_INTERVAL_SECONDS = 60

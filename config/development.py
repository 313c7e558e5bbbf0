import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Attendance rules
ALLOW_CONCURRENT_SESSIONS = bool(int(os.getenv("ALLOW_CONCURRENT_SESSIONS", "0")))
AUTO_CLOCK_OUT_HOURS = int(os.getenv("AUTO_CLOCK_OUT_HOURS", "8"))
WEEKLY_TARGET_HOURS = int(os.getenv("WEEKLY_TARGET_HOURS", "40"))

# Work-time reminder (7h50m of net work by default)
REMINDER_ENABLED = bool(int(os.getenv("REMINDER_ENABLED", "1")))
REMINDER_THRESHOLD_MINUTES = int(os.getenv("REMINDER_THRESHOLD_MINUTES", "470"))
REMINDER_INTERVAL_SECONDS = int(os.getenv("REMINDER_INTERVAL_SECONDS", "60"))

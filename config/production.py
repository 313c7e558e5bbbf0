import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

ALLOW_CONCURRENT_SESSIONS = bool(int(os.getenv("ALLOW_CONCURRENT_SESSIONS", "0")))
AUTO_CLOCK_OUT_HOURS = int(os.getenv("AUTO_CLOCK_OUT_HOURS", "8"))
WEEKLY_TARGET_HOURS = int(os.getenv("WEEKLY_TARGET_HOURS", "40"))

# Run only one reminder loop per deployment, or use the send-reminders command from cron
REMINDER_ENABLED = bool(int(os.getenv("REMINDER_ENABLED", "0")))
REMINDER_THRESHOLD_MINUTES = int(os.getenv("REMINDER_THRESHOLD_MINUTES", "470"))
REMINDER_INTERVAL_SECONDS = int(os.getenv("REMINDER_INTERVAL_SECONDS", "60"))

"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_REMINDER_THRESHOLD_MINUTES = 470
DEFAULT_REMINDER_INTERVAL_SECONDS = 60
DEFAULT_AUTO_CLOCK_OUT_HOURS = 8
DEFAULT_WEEKLY_TARGET_HOURS = 40
DEFAULT_WORK_LOCATION = "office"

NOTIFICATION_LINK = "/attendance"

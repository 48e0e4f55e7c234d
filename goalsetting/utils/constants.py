"""Constants and default values."""

from datetime import time, timedelta

# Reminder slots
DEFAULT_MORNING_TIME = time(8, 0, 0)
DEFAULT_EVENING_TIME = time(20, 0, 0)

# Tolerance around a slot so minute polling can't step over it
FIRING_WINDOW = timedelta(minutes=1)

# Loop intervals (seconds)
DEFAULT_REMINDER_INTERVAL = 60
DEFAULT_RECURRING_INTERVAL = 3600
DEFAULT_EXTERNAL_CALL_TIMEOUT = 30

# Contact cache
DEFAULT_CONTACT_TTL = timedelta(minutes=30)

# Digest rendering
DEFAULT_DISPLAY_NAME = "User"
DEFAULT_APP_URL = "http://localhost:5125"

PRIORITY_COLORS = {
    "high": "#ef4444",
    "medium": "#f59e0b",
    "low": "#22c55e",
}

# Default timezone
DEFAULT_TIMEZONE = "UTC"

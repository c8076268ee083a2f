import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "fieldclock"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Zone used when a request does not name one.
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "America/Los_Angeles")

OVERTIME_THRESHOLD_HOURS = float(os.getenv("OVERTIME_THRESHOLD_HOURS", "40"))
# Subtract break time from each day's reported hours.
DEDUCT_BREAKS = bool(int(os.getenv("DEDUCT_BREAKS", "1")))

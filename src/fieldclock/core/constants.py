"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE

DEFAULT_TIMEZONE = "UTC"
DEFAULT_OVERTIME_THRESHOLD_HOURS = 40

# Travel inferred from movement telemetry must fall strictly inside this band.
MIN_TRAVEL_MS = 1 * MS_PER_MINUTE
MAX_TRAVEL_MS = 4 * MS_PER_HOUR

IN_PROGRESS_LABEL = "In Progress"
EMPTY_CELL = "-"
WEEK_TOTAL_LABEL = "Week Total"
TRAVEL_LABEL = "Travel"
TOTALS_LABEL = "TOTALS"

# Entries fetched on either side of the window so overnight shifts still pair.
DEFAULT_LOOKBACK_HOURS = 24

"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

DEFAULT_SESSION_DAYS = 7

# Attendance grid date key; also the persisted cam_status.date representation.
DATE_KEY_FORMAT = "%Y-%m-%d"

# Editable columns of a timesheet snapshot row.
TIMESHEET_FIELDS = ("whizible", "changepoint", "planview", "comments")

# Editable columns of a Bold Minds snapshot row.
NOMINATION_FIELDS = ("nominated_for", "nominated_month")

HOLIDAY_LOCATIONS = ("Pune", "Mumbai", "Bangalore", "Chennai", "Coimbatore")
DEFAULT_LOCATION = "Pune"

MIN_PASSWORD_LENGTH = 6

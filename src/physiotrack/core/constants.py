"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STORE_KEY = "physiotrack_db"
SCHEMA_VERSION = 3

PHYSIO_DURATION_MINUTES = 45
MASSAGE_DURATIONS_MINUTES = (40, 45, 60)
DEFAULT_MASSAGE_DURATION_MINUTES = 60

MIN_PASSWORD_LENGTH = 4

SIGNATURE_LINE_WIDTH = 2
SIGNATURE_STROKE_COLOR = "#0f172a"

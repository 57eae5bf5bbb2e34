# modules/sa_tracker/constants.py

"""
SA return season constants (April -> January).
"""

SEASON_START_MONTH = 4
"""April"""

SEASON_END_MONTH = 1
"""January (filing deadline)"""

ON_TRACK_THRESHOLD = 99.0
"""Forecast >= 99% counts as on track (absorbs rounding)"""

MAX_COMPLETION = 100.0

MONTHS_IN_YEAR = 12

# Cumulative target per season month (%), monotonic non-decreasing
DEFAULT_CUMULATIVE_TARGETS = (
    ("April", 5.0),
    ("May", 10.0),
    ("June", 20.0),
    ("July", 35.0),
    ("August", 50.0),
    ("September", 65.0),
    ("October", 80.0),
    ("November", 90.0),
    ("December", 95.0),
    ("January", 100.0),
)

DEFAULT_TOTAL_JOBS = 500

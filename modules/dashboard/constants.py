# modules/dashboard/constants.py

"""
Constants for the fixed-cap dashboard scoring (team and staff views).
"""

# ============================================
# FIXED POINT CAPS (40/30/30 split, independent of configured weights)
# ============================================
FIXED_POINT_CAPS = {
    "accounts": 40.0,
    "vat": 30.0,
    "sa": 30.0,
}

SA_POINT_BANDS = (
    (90.0, 30.0),
    (80.0, 25.5),
    (70.0, 19.5),
    (60.0, 10.5),
)
"""Absolute SA points per band; below 60% = 0"""

MAX_MONTHLY_POINTS = 100.0
"""Adjusted monthly points are capped here before computing a bonus"""

# ============================================
# SEASONAL MODEL (calendar month -> multiplier)
# ============================================
SEASONAL_FACTORS = {
    1: 1.2,    # January: filing deadline
    2: 1.0,
    3: 0.95,
    4: 0.9,
    5: 0.9,
    6: 0.9,
    7: 0.9,
    8: 0.85,   # August: quietest month
    9: 0.95,
    10: 1.0,
    11: 1.05,
    12: 1.1,
}

NON_SA_MONTHS = (4, 5, 6, 7, 8, 9)
"""Apr-Sep: missing SA data is expected"""

SA_SEASON_MONTHS = (10, 11, 12, 1, 2, 3)
"""Oct-Mar: missing SA data is a deficiency"""

ACCOUNTS_VAT_SHARE = 70.0
"""Accounts + VAT fixed caps (40 + 30)"""

NON_SA_RESCALE = 100.0 / ACCOUNTS_VAT_SHARE
"""Re-normalizes Accounts + VAT points to a 100 scale"""

SA_MISSING_PENALTY = 0.8
"""Flat multiplier when SA is missing in season"""

ADJUSTMENT_STANDARD = "standard"
ADJUSTMENT_NON_SA_RESCALE = "non_sa_rescale"
ADJUSTMENT_SA_MISSING_PENALTY = "sa_missing_penalty"

# ============================================
# BONUS DEFAULTS
# ============================================
DEFAULT_MONTHLY_SALARY = 150000.0
DEFAULT_BONUS_POOL_DIVISOR = 4.0

CALENDAR_QUARTER_MONTHS = {
    1: (1, 2, 3),
    2: (4, 5, 6),
    3: (7, 8, 9),
    4: (10, 11, 12),
}

# ============================================
# BADGES
# ============================================
BADGE_STREAK_MONTHS = 3
BADGE_THRESHOLD = 90.0

BADGES = {
    "accounts": {
        "id": "1",
        "name": "Accounts Master",
        "description": "3 consecutive months with 90%+ Accounts score",
        "icon": "badge",
        "criteria": "3-month streak of 90%+ in Accounts",
    },
    "vat": {
        "id": "2",
        "name": "VAT Wizard",
        "description": "3 consecutive months with 90%+ VAT score",
        "icon": "badge",
        "criteria": "3-month streak of 90%+ in VAT",
    },
    "sa": {
        "id": "3",
        "name": "SA Champion",
        "description": "3 consecutive months with 90%+ SA score",
        "icon": "badge",
        "criteria": "3-month streak of 90%+ in SA",
    },
    "perfect_quarter": {
        "id": "4",
        "name": "Perfect Quarter",
        "description": "Score 90%+ in all KPIs for an entire quarter",
        "icon": "award",
        "criteria": "90%+ in all KPIs for 3 consecutive months",
    },
}

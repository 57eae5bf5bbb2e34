# modules/bonus/constants.py

"""
Constants for tiered KPI point conversion and bonus calculation.
"""

# ============================================
# POINT TIERS (inclusive lower bound, share of max points)
# ============================================
TIER_BANDS = (
    (90.0, 1.0),
    (80.0, 0.85),
    (70.0, 0.65),
    (60.0, 0.35),
)
"""Below the last band a KPI earns 0 points"""

MONTHS_PER_QUARTER = 3
"""Each KPI category carries exactly 3 monthly percentages"""

# ============================================
# DEFAULT CONFIGURATION
# ============================================
DEFAULT_ACCOUNTS_WEIGHT = 40.0
DEFAULT_VAT_WEIGHT = 30.0
DEFAULT_SA_WEIGHT = 30.0
DEFAULT_BONUS_POOL_DIVISOR = 4.0

MAX_TOTAL_SCORE = 100.0
"""Total score scale; bonus percentage = total score / 100"""

KPI_NAMES = ("accounts", "vat", "sa")

# modules/bonus/seasonal.py
"""
Fiscal period classification and SA seasonal adjustment for the
configurable-weight bonus path.
"""

from datetime import date, datetime
from typing import List, Optional, Sequence, Union

from core.schemas import FiscalPeriod


def determine_fiscal_period(when: Optional[Union[date, datetime]] = None) -> FiscalPeriod:
    """
    Fiscal quarter of an April-start year.
    Pass an explicit date for deterministic results; None reads today's date.
    """
    month = (when or date.today()).month  # 1-12

    if 4 <= month <= 6:
        return FiscalPeriod.Q1   # Apr-Jun
    if 7 <= month <= 9:
        return FiscalPeriod.Q2   # Jul-Sep
    if 10 <= month <= 12:
        return FiscalPeriod.Q3   # Oct-Dec
    return FiscalPeriod.Q4       # Jan-Mar


def adjust_sa_for_fiscal_period(monthly_percentages: Sequence[float], fiscal_period: FiscalPeriod) -> List[float]:
    """
    Hook for cumulative-target-aware SA rescaling per quarter.

    Every branch currently returns the percentages unchanged. The dispatch is
    kept so quarter-specific rules can be added without touching callers.
    """
    period = FiscalPeriod(fiscal_period)

    if period is FiscalPeriod.Q1:
        # Start of tax year: normal expectations
        return list(monthly_percentages)
    elif period is FiscalPeriod.Q2:
        # Building momentum
        return list(monthly_percentages)
    elif period is FiscalPeriod.Q3:
        # Higher expectations toward the January deadline
        return list(monthly_percentages)
    elif period is FiscalPeriod.Q4:
        # Deadline quarter: candidate for a stricter model
        return list(monthly_percentages)
    return list(monthly_percentages)

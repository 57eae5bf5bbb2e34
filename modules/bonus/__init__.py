# modules/bonus/__init__.py
"""
Configurable-weight bonus engine.

Usage:
    from modules.bonus import calculate_bonus, validate_kpi_input
"""

from .service import (
    points_for,
    aggregate,
    validate_kpi_input,
    calculate_bonus,
    calculate_employee_bonus,
    bonus_rating,
    DEFAULT_WEIGHTS
)
from .seasonal import determine_fiscal_period, adjust_sa_for_fiscal_period
from .schemas import KpiScores, EmployeeData, KpiResult, BonusCalculation

__all__ = [
    "points_for",
    "aggregate",
    "validate_kpi_input",
    "calculate_bonus",
    "calculate_employee_bonus",
    "bonus_rating",
    "DEFAULT_WEIGHTS",
    "determine_fiscal_period",
    "adjust_sa_for_fiscal_period",
    "KpiScores",
    "EmployeeData",
    "KpiResult",
    "BonusCalculation"
]

# modules/dashboard/__init__.py
"""
Fixed-cap (40/30/30) scoring used by the staff and team dashboards,
including the seasonal SA model. Independent from modules.bonus weights.
"""

from .service import (
    fixed_points_for,
    sa_points_for,
    seasonal_factor,
    calculate_monthly_points,
    calculate_quarterly_bonus,
    check_badges,
    build_leaderboard,
    team_performance
)
from .schemas import MonthlyKpiRecord, MonthlyPoints, Badge

__all__ = [
    "fixed_points_for",
    "sa_points_for",
    "seasonal_factor",
    "calculate_monthly_points",
    "calculate_quarterly_bonus",
    "check_badges",
    "build_leaderboard",
    "team_performance",
    "MonthlyKpiRecord",
    "MonthlyPoints",
    "Badge"
]

# modules/sa_tracker/__init__.py
"""
SA return season: capacity-weighted team targets, progress tracking and
year-end completion forecast.

Usage:
    from modules.sa_tracker import distribute, forecast
"""

from .distribution import (
    distribute,
    apply_total_update,
    apply_new_clients,
    redistribute_by_capacity,
    apply_team_allocation
)
from .forecast import forecast, forecast_team, months_until
from .service import default_sa_tracker, record_jobs_completed, season_progress
from .schemas import (
    TeamCapacity,
    TeamBreakdown,
    SaTarget,
    MonthlyThroughput,
    SaJob,
    ProjectionPoint,
    SaForecast,
    SeasonProgress
)

__all__ = [
    "distribute",
    "apply_total_update",
    "apply_new_clients",
    "redistribute_by_capacity",
    "apply_team_allocation",
    "forecast",
    "forecast_team",
    "months_until",
    "default_sa_tracker",
    "record_jobs_completed",
    "season_progress",
    "TeamCapacity",
    "TeamBreakdown",
    "SaTarget",
    "MonthlyThroughput",
    "SaJob",
    "ProjectionPoint",
    "SaForecast",
    "SeasonProgress"
]

# modules/sa_tracker/forecast.py
"""
Year-end SA completion forecast.

Projects the average monthly throughput of the months that already have
data up to the season-end month, and reports whether the season is on
track to finish. Works for the whole organization or for one team's slice
of the tracker (see forecast_team).
"""

import logging
from datetime import date, datetime
from collections.abc import Mapping
from typing import Optional, Sequence, Union

from dateutil.relativedelta import relativedelta

from core.validation import require_positive
from modules.shared.utils import round_half_up

from .constants import ON_TRACK_THRESHOLD, MAX_COMPLETION, MONTHS_IN_YEAR, SEASON_END_MONTH
from .schemas import MonthlyThroughput, SaTarget, SaForecast, ProjectionPoint

logger = logging.getLogger("SaForecast")

HistoryEntry = Union[MonthlyThroughput, SaTarget, Mapping]


def _value(entry: HistoryEntry, name: str) -> int:
    if isinstance(entry, Mapping):
        return entry.get(name, 0) or 0
    return getattr(entry, name, 0) or 0


def months_until(current_month: int, end_month: int) -> int:
    """
    Calendar months from current_month to end_month (both 1-12), wrapping
    over the year end. Zero distance means the season just restarted: 12.
    """
    distance = (end_month - current_month) % MONTHS_IN_YEAR
    return distance or MONTHS_IN_YEAR


def _completion(jobs: float, total_jobs: int) -> float:
    return round_half_up(min(MAX_COMPLETION, jobs / total_jobs * 100), 1)


def forecast(
    history: Sequence[HistoryEntry],
    current_date: Optional[Union[date, datetime]] = None,
    season_end_month: int = SEASON_END_MONTH,
    total_jobs: Optional[int] = None,
    team_name: Optional[str] = None
) -> SaForecast:
    """
    Forecasts year-end completion from per-month throughput.

    Args:
        history: Rows with jobs_completed (and total_jobs), one per month
        current_date: Reference date, today when omitted
        season_end_month: Calendar month the season closes (1 = January)
        total_jobs: Jobs to finish; defaults to the latest row's total_jobs
        team_name: Label carried into the result for team forecasts

    Raises:
        ValueError: If total_jobs resolves to <= 0
    """
    if current_date is None:
        current_date = date.today()

    if total_jobs is None:
        total_jobs = _value(history[-1], "total_jobs") if history else 0
    require_positive(total_jobs, "total_jobs")

    completed_jobs = sum(_value(entry, "jobs_completed") for entry in history)
    months_with_data = sum(1 for entry in history if _value(entry, "jobs_completed") > 0)

    if months_with_data == 0:
        logger.debug(f"No SA throughput recorded yet{f' for {team_name}' if team_name else ''}")
        return SaForecast(
            completed_jobs=0,
            total_jobs=total_jobs,
            months_with_data=0,
            avg_monthly_rate=0.0,
            months_remaining=months_until(current_date.month, season_end_month),
            projected_total_jobs=0.0,
            forecasted_completion=0.0,
            is_on_track=False,
            required_monthly_rate=round_half_up(total_jobs / len(history)) if history else total_jobs,
            projected_shortfall=total_jobs,
            team_name=team_name
        )

    avg_monthly_rate = completed_jobs / months_with_data
    months_remaining = months_until(current_date.month, season_end_month)
    projected_total_jobs = completed_jobs + avg_monthly_rate * months_remaining
    forecasted_completion = _completion(projected_total_jobs, total_jobs)

    projection = []
    for i in range(1, months_remaining + 1):
        running_total = min(total_jobs, completed_jobs + avg_monthly_rate * i)
        label = (current_date + relativedelta(months=i)).strftime("%b %Y")
        projection.append(ProjectionPoint(
            month=label,
            projected_jobs=round_half_up(running_total),
            projected_completion=_completion(running_total, total_jobs)
        ))

    result = SaForecast(
        completed_jobs=completed_jobs,
        total_jobs=total_jobs,
        months_with_data=months_with_data,
        avg_monthly_rate=avg_monthly_rate,
        months_remaining=months_remaining,
        projected_total_jobs=projected_total_jobs,
        forecasted_completion=forecasted_completion,
        is_on_track=forecasted_completion >= ON_TRACK_THRESHOLD,
        required_monthly_rate=round_half_up((total_jobs - completed_jobs) / months_remaining),
        projected_shortfall=round_half_up(max(0, total_jobs - projected_total_jobs)),
        projection=projection,
        team_name=team_name
    )

    logger.debug(
        f"Forecast{f' [{team_name}]' if team_name else ''}: {completed_jobs}/{total_jobs} done, "
        f"{forecasted_completion}% projected, on track={result.is_on_track}"
    )
    return result


def forecast_team(
    targets: Sequence[SaTarget],
    team_name: str,
    current_date: Optional[Union[date, datetime]] = None,
    season_end_month: int = SEASON_END_MONTH
) -> SaForecast:
    """
    Same forecast on one team's slice of the tracker: the team's monthly
    jobs_completed against its latest target_jobs.

    Raises:
        ValueError: If the team never appears in a team_breakdown
    """
    rows = []
    for month in targets:
        for team in month.team_breakdown or []:
            if team.team_name == team_name:
                rows.append(MonthlyThroughput(jobs_completed=team.jobs_completed, total_jobs=team.target_jobs))

    if not rows:
        logger.warning(f"Team '{team_name}' not found in SA tracker breakdown")
        raise ValueError(f"No SA breakdown found for team '{team_name}'")

    return forecast(rows, current_date=current_date, season_end_month=season_end_month, team_name=team_name)

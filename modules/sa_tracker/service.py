# modules/sa_tracker/service.py
"""
SA tracker updates: recording completed jobs and reading season progress.
Target splitting lives in distribution.py, the year-end projection in forecast.py.
"""

import logging
from datetime import date, datetime
from typing import List, Optional, Sequence, Union

from modules.shared.utils import round_half_up, month_number

from .constants import DEFAULT_CUMULATIVE_TARGETS, DEFAULT_TOTAL_JOBS, MAX_COMPLETION
from .schemas import SaTarget, SeasonProgress

logger = logging.getLogger("SaTracker")


def default_sa_tracker(total_jobs: int = DEFAULT_TOTAL_JOBS) -> List[SaTarget]:
    """Empty April -> January season with the standard cumulative targets."""
    return [
        SaTarget(month=month, target=target, total_jobs=total_jobs)
        for month, target in DEFAULT_CUMULATIVE_TARGETS
    ]


def _completion(jobs: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round_half_up(min(MAX_COMPLETION, jobs / total * 100), 1)


def record_jobs_completed(target: SaTarget, jobs_completed: int, team_name: Optional[str] = None) -> SaTarget:
    """
    Stores the jobs completed in a month and recomputes its completion %.

    With team_name only that team's breakdown row changes; the month's own
    figures become the sum over its teams.

    Raises:
        ValueError: Negative job count or unknown team
    """
    if jobs_completed < 0:
        raise ValueError(f"jobs_completed cannot be negative (got {jobs_completed})")

    if team_name is None:
        return target.model_copy(update={
            "jobs_completed": jobs_completed,
            "completed": _completion(jobs_completed, target.total_jobs)
        })

    breakdown = list(target.team_breakdown or [])
    names = [team.team_name for team in breakdown]
    if team_name not in names:
        logger.warning(f"record_jobs_completed: team '{team_name}' not in {target.month} breakdown")
        raise ValueError(f"Team '{team_name}' has no breakdown for {target.month}")

    i = names.index(team_name)
    team = breakdown[i]
    breakdown[i] = team.model_copy(update={
        "jobs_completed": jobs_completed,
        "completed": _completion(jobs_completed, team.target_jobs)
    })

    month_jobs = sum(team.jobs_completed for team in breakdown)
    return target.model_copy(update={
        "team_breakdown": breakdown,
        "jobs_completed": month_jobs,
        "completed": _completion(month_jobs, target.total_jobs)
    })


def season_progress(
    targets: Sequence[SaTarget],
    current_date: Optional[Union[date, datetime]] = None
) -> SeasonProgress:
    """
    Cumulative completion up to the current month against that month's
    cumulative target. Outside the season (Feb-Mar) the last month is used.

    Raises:
        ValueError: If targets is empty
    """
    if not targets:
        raise ValueError("SA tracker has no months")
    if current_date is None:
        current_date = date.today()

    index = len(targets) - 1
    for i, month in enumerate(targets):
        if month_number(month.month) == current_date.month:
            index = i
            break

    current = targets[index]
    jobs_to_date = sum(month.jobs_completed for month in targets[:index + 1])
    actual = _completion(jobs_to_date, current.total_jobs)

    return SeasonProgress(
        month=current.month,
        target=current.target,
        actual=actual,
        jobs_completed=jobs_to_date,
        total_jobs=current.total_jobs,
        gap=round_half_up(current.target - actual, 1)
    )

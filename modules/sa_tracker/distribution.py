# modules/sa_tracker/distribution.py
"""
Capacity-weighted split of workload targets across teams.
"""

import logging
from typing import Callable, Dict, List, Sequence

from modules.shared.utils import round_half_up

from .schemas import TeamCapacity, SaTarget, TeamBreakdown

logger = logging.getLogger("SaDistribution")


def distribute(total_units: int, teams: Sequence[TeamCapacity]) -> Dict[str, int]:
    """
    Splits total_units proportionally to each team's capacity_weight.

    Shares are rounded independently; the rounding drift (total - sum of
    shares) goes entirely to the team with the largest share (first one on
    ties), so the shares always add up to total_units. When most shares round
    up, that team can end with a negative share (2 units over 4 equal teams
    gives -1, 1, 1, 1); callers storing targets must reject it.

    Raises:
        ValueError: Empty team list, duplicate team names or weights summing to <= 0
    """
    if not teams:
        logger.error("distribute() called without teams")
        raise ValueError("At least one team is required to distribute targets")

    names = [t.team_name for t in teams]
    if len(set(names)) != len(names):
        raise ValueError(f"Duplicate team names in capacity list: {names}")

    total_weight = sum(t.capacity_weight for t in teams)
    if total_weight <= 0:
        logger.error(f"Invalid capacity weights (sum={total_weight})")
        raise ValueError("Team capacity weights must sum to more than 0")

    shares = {
        t.team_name: round_half_up(total_units * t.capacity_weight / total_weight)
        for t in teams
    }

    difference = total_units - sum(shares.values())
    if difference != 0:
        largest_team = max(names, key=lambda name: shares[name])  # max() keeps the first on ties
        shares[largest_team] += difference
        logger.debug(f"Rounding drift {difference:+d} assigned to {largest_team}")

    return shares


def apply_total_update(
    targets: Sequence[SaTarget],
    month_index: int,
    new_total: int,
    teams: Sequence[TeamCapacity]
) -> List[SaTarget]:
    """
    Sets total_jobs for a month and every later month, re-splitting each
    team's target_jobs by capacity. Teams in a month's breakdown that are not
    in the capacity list keep their previous share of the total.

    Raises:
        ValueError: If new_total < 1 or a team's share comes out negative
        IndexError: If month_index is out of range
    """
    if new_total < 1:
        raise ValueError(f"Total jobs must be at least 1 (got {new_total})")
    if not 0 <= month_index < len(targets):
        raise IndexError(f"month_index {month_index} out of range")

    allocation = _checked_allocation(new_total, teams)
    updated = list(targets)

    for i in range(month_index, len(updated)):
        month = updated[i]
        breakdown = None
        if month.team_breakdown is not None:
            breakdown = [
                _with_target(team, _team_target(team, month, allocation, new_total))
                for team in month.team_breakdown
            ]
        updated[i] = month.model_copy(update={"total_jobs": new_total, "team_breakdown": breakdown})

    logger.info(f"SA total updated to {new_total} from {targets[month_index].month} onward")
    return updated


def redistribute_by_capacity(targets: Sequence[SaTarget], teams: Sequence[TeamCapacity]) -> List[SaTarget]:
    """
    Re-splits every month's team targets after team capacities change.
    Month totals stay as they are; teams missing from the capacity list keep
    their current target_jobs.

    Raises:
        ValueError: If a team's share comes out negative
    """
    updated = []
    for month in targets:
        if month.team_breakdown is None:
            updated.append(month)
            continue
        allocation = _checked_allocation(month.total_jobs, teams)
        breakdown = [
            _with_target(team, allocation.get(team.team_name, team.target_jobs))
            for team in month.team_breakdown
        ]
        updated.append(month.model_copy(update={"team_breakdown": breakdown}))

    logger.info(f"SA team targets re-split across {len(teams)} teams")
    return updated


def apply_team_allocation(
    targets: Sequence[SaTarget],
    month_index: int,
    team_name: str,
    target_jobs: int,
    propagate: bool = False
) -> List[SaTarget]:
    """
    Manual override of one team's target_jobs in a month. The month's
    total_jobs becomes the sum of its team targets.

    With propagate, the team's target in every later month is scaled by
    target_jobs / previous target (previous 0 counts as 1) and those
    months' totals are recomputed the same way.

    Raises:
        ValueError: Negative target_jobs or team not in the month's breakdown
        IndexError: If month_index is out of range
    """
    if target_jobs < 0:
        raise ValueError(f"target_jobs cannot be negative (got {target_jobs})")
    if not 0 <= month_index < len(targets):
        raise IndexError(f"month_index {month_index} out of range")

    month = targets[month_index]
    previous = next((t.target_jobs for t in month.team_breakdown or [] if t.team_name == team_name), None)
    if previous is None:
        logger.warning(f"apply_team_allocation: team '{team_name}' not in {month.month} breakdown")
        raise ValueError(f"Team '{team_name}' has no breakdown for {month.month}")

    updated = list(targets)
    updated[month_index] = _override_team(month, team_name, lambda _: target_jobs)

    if propagate:
        ratio = target_jobs / (previous or 1)
        for i in range(month_index + 1, len(updated)):
            if updated[i].team_breakdown is not None:
                updated[i] = _override_team(updated[i], team_name, lambda jobs: round_half_up(jobs * ratio))

    logger.info(f"{team_name} allocation for {month.month} set to {target_jobs} (propagate={propagate})")
    return updated


def _override_team(month: SaTarget, team_name: str, new_target: Callable[[int], int]) -> SaTarget:
    breakdown = [
        _with_target(team, new_target(team.target_jobs)) if team.team_name == team_name else team
        for team in month.team_breakdown
    ]
    return month.model_copy(update={
        "team_breakdown": breakdown,
        "total_jobs": sum(team.target_jobs for team in breakdown)
    })


def _checked_allocation(total_units: int, teams: Sequence[TeamCapacity]) -> Dict[str, int]:
    allocation = distribute(total_units, teams)
    negative = {name: units for name, units in allocation.items() if units < 0}
    if negative:
        logger.error(f"Capacity split of {total_units} jobs leaves negative targets: {negative}")
        raise ValueError(
            f"Cannot split {total_units} jobs across {len(allocation)} teams without a negative target: {negative}"
        )
    return allocation


def _with_target(team: TeamBreakdown, target_jobs: int) -> TeamBreakdown:
    # model_copy does not validate: target_jobs must stay >= 0
    return TeamBreakdown.model_validate({**team.model_dump(), "target_jobs": target_jobs})


def _team_target(team: TeamBreakdown, month: SaTarget, allocation: Dict[str, int], new_total: int) -> int:
    if team.team_name in allocation:
        return allocation[team.team_name]
    if not month.total_jobs:
        return 0
    return round_half_up((team.target_jobs / month.total_jobs) * new_total)


def apply_new_clients(targets: Sequence[SaTarget]) -> List[SaTarget]:
    """
    New clients taken on in a month add to total_jobs for that month and all
    later months (cumulative).
    """
    updated = []
    added = 0
    for month in targets:
        added += month.new_clients or 0
        updated.append(month.model_copy(update={"total_jobs": month.total_jobs + added}) if added else month)
    return updated

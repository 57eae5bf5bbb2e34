# modules/bonus/service.py
"""
Bonus engine for the configurable-weight path.

Responsibilities:
- Tiered conversion of KPI percentages to points
- Per-category aggregation of the 3 monthly values
- Quarterly pool and bonus amount
- Input validation (separate step, run by the caller before calculating)

Does NOT contain:
- Persistence, export or rendering
- The fixed-cap dashboard scoring (see modules/dashboard)
"""

import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple, Union

from core.config_service import ConfigService
from core.schemas import FiscalPeriod, KpiWeights
from core.validation import is_valid_percentage, require_positive

from .constants import (
    TIER_BANDS,
    MONTHS_PER_QUARTER,
    DEFAULT_ACCOUNTS_WEIGHT,
    DEFAULT_VAT_WEIGHT,
    DEFAULT_SA_WEIGHT,
    DEFAULT_BONUS_POOL_DIVISOR,
    MAX_TOTAL_SCORE,
    KPI_NAMES
)
from .schemas import KpiScores, EmployeeData, KpiResult, BonusCalculation
from .seasonal import adjust_sa_for_fiscal_period

logger = logging.getLogger("BonusEngine")

DEFAULT_WEIGHTS = KpiWeights(
    accounts_weight=DEFAULT_ACCOUNTS_WEIGHT,
    vat_weight=DEFAULT_VAT_WEIGHT,
    sa_weight=DEFAULT_SA_WEIGHT,
    bonus_pool_divisor=DEFAULT_BONUS_POOL_DIVISOR
)


def points_for(percentage: float, max_points: float) -> float:
    """
    Points for one KPI percentage:
    >= 90% -> full points, 80-89% -> 85%, 70-79% -> 65%, 60-69% -> 35%, < 60% -> 0.
    No rounding and no clamping: validate the percentage first.
    """
    for lower_bound, share in TIER_BANDS:
        if percentage >= lower_bound:
            return max_points * share
    return 0.0


def aggregate(monthly_percentages: Sequence[float], max_points: float) -> KpiResult:
    """
    Builds the KpiResult of one category from its monthly percentages.
    """
    monthly_scores = list(monthly_percentages)
    monthly_points = [points_for(pct, max_points) for pct in monthly_scores]
    months = len(monthly_scores)

    average_percentage = sum(monthly_scores) / months
    # Average of the monthly points, NOT the sum: keeps total_points <= max_points
    total_points = sum(monthly_points) / months

    # A weight configured to 0 would divide by zero
    percentage = (total_points / max_points) * 100 if max_points else 0.0

    return KpiResult(
        monthly_scores=monthly_scores,
        monthly_points=monthly_points,
        average_percentage=average_percentage,
        total_points=total_points,
        max_points=max_points,
        percentage=percentage
    )


def validate_kpi_input(kpi_scores: Union[KpiScores, Mapping]) -> List[str]:
    """
    Checks that every KPI has exactly 3 monthly percentages in 0-100.
    Returns error messages; empty list = valid.
    """
    errors: List[str] = []

    for kpi_name in KPI_NAMES:
        if isinstance(kpi_scores, Mapping):
            scores: Any = kpi_scores.get(kpi_name)
        else:
            scores = getattr(kpi_scores, kpi_name, None)

        if not isinstance(scores, (list, tuple)) or len(scores) != MONTHS_PER_QUARTER:
            errors.append(f"{kpi_name} must have exactly 3 monthly percentages")
            continue

        for index, score in enumerate(scores):
            if not is_valid_percentage(score):
                errors.append(f"{kpi_name} month {index + 1} must be a percentage between 0-100")

    return errors


def calculate_bonus(
    employee: EmployeeData,
    weights: Optional[KpiWeights] = None,
    bonus_pool_divisor: Optional[float] = None,
    fiscal_period: FiscalPeriod = FiscalPeriod.Q1
) -> BonusCalculation:
    """
    Main bonus calculation. Assumes validate_kpi_input passed.

    Args:
        employee: Salary and KPI scores
        weights: Max points per KPI (defaults to 40/30/30)
        bonus_pool_divisor: Defaults to weights.bonus_pool_divisor
        fiscal_period: Quarter used by the SA adjustment hook

    Raises:
        ValueError: If the divisor is not greater than 0
    """
    cfg = weights or DEFAULT_WEIGHTS
    divisor = require_positive(
        cfg.bonus_pool_divisor if bonus_pool_divisor is None else bonus_pool_divisor,
        "bonus_pool_divisor"
    )

    quarterly_pool = employee.monthly_salary / divisor
    scores = employee.kpi_scores

    accounts = aggregate(scores.accounts, cfg.accounts_weight)
    vat = aggregate(scores.vat, cfg.vat_weight)

    adjusted_sa = adjust_sa_for_fiscal_period(scores.sa, fiscal_period)
    sa = aggregate(adjusted_sa, cfg.sa_weight)

    total_score = accounts.total_points + vat.total_points + sa.total_points
    bonus_percentage = total_score / MAX_TOTAL_SCORE
    bonus_amount = bonus_percentage * quarterly_pool

    logger.debug(
        f"Bonus {employee.name or employee.id}: score={total_score:.2f} "
        f"pool={quarterly_pool:.2f} amount={bonus_amount:.2f} ({FiscalPeriod(fiscal_period).value})"
    )

    return BonusCalculation(
        accounts=accounts,
        vat=vat,
        sa=sa,
        total_score=total_score,
        bonus_percentage=bonus_percentage,
        bonus_amount=bonus_amount,
        quarterly_pool=quarterly_pool,
        fiscal_period=FiscalPeriod(fiscal_period)
    )


def calculate_employee_bonus(
    employee: Optional[EmployeeData],
    weights: Optional[KpiWeights] = None,
    fiscal_period: FiscalPeriod = FiscalPeriod.Q1
) -> Tuple[Optional[BonusCalculation], List[str]]:
    """
    Validate-then-calculate flow used by callers.
    Returns (result, []) or (None, errors) when the input is rejected.
    """
    if employee is None:
        return None, ["No employee data provided"]

    errors = validate_kpi_input(employee.kpi_scores)
    if errors:
        logger.warning(f"Bonus calculation rejected for {employee.name or employee.id}: {errors}")
        return None, errors

    return calculate_bonus(employee, weights, fiscal_period=fiscal_period), []


def bonus_rating(total_score: float) -> str:
    """Label for a total score (Excellent / Good / Fair / Needs Improvement)."""
    return ConfigService.get_thresholds("bonus").get_label(total_score)

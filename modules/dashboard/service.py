import logging
from typing import Dict, Iterable, List, Optional

import pandas as pd

from core.config_service import ConfigService
from core.validation import require_positive
from modules.bonus.service import points_for
from modules.shared.utils import round_half_up

from .constants import (
    FIXED_POINT_CAPS,
    SA_POINT_BANDS,
    MAX_MONTHLY_POINTS,
    SEASONAL_FACTORS,
    NON_SA_MONTHS,
    NON_SA_RESCALE,
    SA_MISSING_PENALTY,
    ADJUSTMENT_STANDARD,
    ADJUSTMENT_NON_SA_RESCALE,
    ADJUSTMENT_SA_MISSING_PENALTY,
    DEFAULT_MONTHLY_SALARY,
    DEFAULT_BONUS_POOL_DIVISOR,
    CALENDAR_QUARTER_MONTHS,
    BADGE_STREAK_MONTHS,
    BADGE_THRESHOLD,
    BADGES
)
from .schemas import MonthlyKpiRecord, MonthlyPoints, Badge

logger = logging.getLogger("DashboardScoring")


# =============================================================================
# FIXED-CAP POINTS
# =============================================================================

def fixed_points_for(percentage: float, category: str) -> float:
    """
    Accounts (40) / VAT (30) points on the fixed dashboard split.
    SA has its own table: use sa_points_for.
    """
    if category == "sa":
        raise ValueError("SA uses its own fixed table: call sa_points_for()")
    if category not in FIXED_POINT_CAPS:
        raise ValueError(f"Unknown KPI category '{category}'")
    return points_for(percentage, FIXED_POINT_CAPS[category])


def sa_points_for(percentage: float) -> float:
    """Fixed SA points: 30 / 25.5 / 19.5 / 10.5 / 0, whatever the configured SA weight."""
    for lower_bound, points in SA_POINT_BANDS:
        if percentage >= lower_bound:
            return points
    return 0.0


def seasonal_factor(month: int) -> float:
    """Multiplier for a calendar month (1-12)."""
    return SEASONAL_FACTORS[month]


# =============================================================================
# MONTHLY / QUARTERLY SCORING
# =============================================================================

def calculate_monthly_points(
    record: MonthlyKpiRecord,
    monthly_salary: float = DEFAULT_MONTHLY_SALARY,
    bonus_pool_divisor: float = DEFAULT_BONUS_POOL_DIVISOR
) -> MonthlyPoints:
    """
    Fixed-cap points of one month with the seasonal model applied.

    When SA is 0 but Accounts or VAT were recorded:
    - Apr-Sep: Accounts+VAT points rescaled by 100/70 (SA absence expected)
    - Oct-Mar: Accounts+VAT points x 0.8 (SA absence in season is penalized)
    The month's seasonal multiplier applies in every branch.
    """
    pool = monthly_salary / require_positive(bonus_pool_divisor, "bonus_pool_divisor")

    accounts_points = fixed_points_for(record.accounts, "accounts")
    vat_points = fixed_points_for(record.vat, "vat")
    sa_points = sa_points_for(record.sa)
    raw_total = accounts_points + vat_points + sa_points

    month = record.month_number
    if record.sa == 0 and (record.accounts > 0 or record.vat > 0):
        if month in NON_SA_MONTHS:
            base = (accounts_points + vat_points) * NON_SA_RESCALE
            adjustment = ADJUSTMENT_NON_SA_RESCALE
        else:
            base = (accounts_points + vat_points) * SA_MISSING_PENALTY
            adjustment = ADJUSTMENT_SA_MISSING_PENALTY
    else:
        base = raw_total
        adjustment = ADJUSTMENT_STANDARD

    factor = seasonal_factor(month)
    adjusted_total = min(MAX_MONTHLY_POINTS, base * factor)

    return MonthlyPoints(
        month=record.month,
        accounts_points=accounts_points,
        vat_points=vat_points,
        sa_points=sa_points,
        raw_total=raw_total,
        adjustment=adjustment,
        seasonal_factor=factor,
        adjusted_total=adjusted_total,
        bonus_amount=round_half_up((adjusted_total / 100) * pool)
    )


def calculate_quarterly_bonus(
    records: Iterable[MonthlyKpiRecord],
    staff_id: str,
    year: int,
    quarter: int,
    monthly_salary: float = DEFAULT_MONTHLY_SALARY,
    bonus_pool_divisor: float = DEFAULT_BONUS_POOL_DIVISOR
) -> int:
    """
    Average adjusted points of a calendar quarter (1 = Jan-Mar) x pool, rounded.
    Returns 0 when the staff member has no records in the quarter.
    """
    if quarter not in CALENDAR_QUARTER_MONTHS:
        raise ValueError(f"quarter must be 1-4 (got {quarter})")

    months = CALENDAR_QUARTER_MONTHS[quarter]
    quarter_records = [
        r for r in records
        if r.staff_id == staff_id and r.year == year and r.month_number in months
    ]
    if not quarter_records:
        return 0

    scored = [calculate_monthly_points(r, monthly_salary, bonus_pool_divisor) for r in quarter_records]
    average_points = sum(s.adjusted_total for s in scored) / len(scored)
    pool = monthly_salary / bonus_pool_divisor
    return round_half_up((average_points / 100) * pool)


# =============================================================================
# BADGES
# =============================================================================

def check_badges(records: Iterable[MonthlyKpiRecord], staff_id: str) -> List[Badge]:
    """
    Streak badges over the 3 most recent months of one staff member.
    """
    staff_records = [r for r in records if r.staff_id == staff_id]
    latest = sorted(staff_records, key=lambda r: r.month, reverse=True)[:BADGE_STREAK_MONTHS]
    if len(latest) < BADGE_STREAK_MONTHS:
        return []

    earned = []
    for category in ("accounts", "vat", "sa"):
        if all(getattr(r, category) >= BADGE_THRESHOLD for r in latest):
            earned.append(Badge(**BADGES[category]))

    if all(
        r.accounts >= BADGE_THRESHOLD and r.vat >= BADGE_THRESHOLD and r.sa >= BADGE_THRESHOLD
        for r in latest
    ):
        earned.append(Badge(**BADGES["perfect_quarter"]))

    return earned


# =============================================================================
# AGGREGATES (pandas)
# =============================================================================

def _records_frame(records: Iterable[MonthlyKpiRecord]) -> pd.DataFrame:
    rows = []
    for r in records:
        scored = calculate_monthly_points(r)
        rows.append({
            "staff_id": r.staff_id,
            "team_name": r.team_name,
            "month": r.month,
            "accounts": r.accounts,
            "vat": r.vat,
            "sa": r.sa,
            "total_points": scored.adjusted_total,
        })
    return pd.DataFrame(rows, columns=["staff_id", "team_name", "month", "accounts", "vat", "sa", "total_points"])


def build_leaderboard(records: Iterable[MonthlyKpiRecord], month: Optional[str] = None) -> List[Dict]:
    """
    Ranks staff by average adjusted points (optionally for one YYYY-MM month).
    Returns plain records: rank, staff_id, months, accounts, vat, sa, total_points.
    """
    df = _records_frame(records)
    if month is not None:
        df = df[df["month"] == month]
    if df.empty:
        return []

    board = (
        df.groupby("staff_id", as_index=False)
        .agg(
            months=("month", "count"),
            accounts=("accounts", "mean"),
            vat=("vat", "mean"),
            sa=("sa", "mean"),
            total_points=("total_points", "mean"),
        )
        .sort_values(["total_points", "staff_id"], ascending=[False, True])
        .reset_index(drop=True)
    )
    board.insert(0, "rank", range(1, len(board) + 1))
    rounded = ["accounts", "vat", "sa", "total_points"]
    board[rounded] = board[rounded].map(lambda v: round_half_up(v, 1))

    return board.to_dict("records")


def team_performance(records: Iterable[MonthlyKpiRecord], month: str) -> List[Dict]:
    """
    Team view for one month: member percentages are averaged per team, then
    scored with the fixed-cap seasonal model.
    Records without team_name are ignored.
    """
    df = _records_frame(records)
    df = df[(df["month"] == month) & df["team_name"].notna()]
    if df.empty:
        return []

    thresholds = ConfigService.get_thresholds("team")
    teams = (
        df.groupby("team_name", as_index=False)
        .agg(members=("staff_id", "nunique"), accounts=("accounts", "mean"), vat=("vat", "mean"), sa=("sa", "mean"))
    )

    result = []
    for row in teams.itertuples(index=False):
        team_month = MonthlyKpiRecord(
            staff_id=row.team_name, month=month, accounts=row.accounts, vat=row.vat, sa=row.sa, team_name=row.team_name
        )
        scored = calculate_monthly_points(team_month)
        result.append({
            "team_name": row.team_name,
            "members": int(row.members),
            "accounts": round_half_up(float(row.accounts), 1),
            "vat": round_half_up(float(row.vat), 1),
            "sa": round_half_up(float(row.sa), 1),
            "total_points": scored.adjusted_total,
            "adjustment": scored.adjustment,
            "rating": thresholds.get_label(scored.adjusted_total),
        })

    logger.debug(f"Team performance {month}: {len(result)} teams")
    return sorted(result, key=lambda t: t["total_points"], reverse=True)

# modules/bonus/schemas.py

from dataclasses import dataclass
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

from core.schemas import FiscalPeriod

# --- Input Schemas ---

class KpiScores(BaseModel):
    """
    Three monthly percentages per KPI category.
    Shape and range are NOT enforced here: validate_kpi_input reports them.
    """
    accounts: List[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0])
    vat: List[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0])
    sa: List[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0])

    def with_month(self, kpi: str, month: int, value: float) -> "KpiScores":
        """Copy with a single month edited (month is 0-based)."""
        scores = list(getattr(self, kpi))
        scores[month] = value
        return self.model_copy(update={kpi: scores})


class EmployeeData(BaseModel):
    """Employee selected for a bonus calculation."""
    id: Optional[str] = None
    name: str = ""
    monthly_salary: float = Field(0, ge=0, description="Monthly salary used for the bonus pool")
    kpi_scores: KpiScores = Field(default_factory=KpiScores)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Result Records ---

@dataclass(frozen=True)
class KpiResult:
    """Detailed result for one KPI category"""
    monthly_scores: List[float]   # Raw monthly percentages
    monthly_points: List[float]   # Points earned each month
    average_percentage: float     # Mean of the 3 raw percentages
    total_points: float           # Mean (not sum) of monthly points
    max_points: float             # Category weight
    percentage: float             # total_points / max_points * 100


@dataclass(frozen=True)
class BonusCalculation:
    """Snapshot of one bonus calculation"""
    accounts: KpiResult
    vat: KpiResult
    sa: KpiResult
    total_score: float        # 0 - 100
    bonus_percentage: float   # total_score / 100
    bonus_amount: float
    quarterly_pool: float     # monthly_salary / bonus_pool_divisor
    fiscal_period: FiscalPeriod = FiscalPeriod.Q1

# modules/sa_tracker/schemas.py

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Team Schemas ---

class TeamCapacity(_CamelModel):
    """Relative share of a team when splitting workload targets."""
    team_name: str = Field(..., min_length=1)
    capacity_weight: float = Field(1.0, gt=0)
    # Informational: not used by the distribution math
    sa_efficiency_factor: float = Field(1.0, gt=0)
    accounts_efficiency_factor: float = Field(1.0, gt=0)
    vat_efficiency_factor: float = Field(1.0, gt=0)


class TeamBreakdown(_CamelModel):
    """Team slice of a month in the SA tracker."""
    team_name: str
    jobs_completed: int = Field(0, ge=0)
    target_jobs: int = Field(0, ge=0)
    completed: float = Field(0, ge=0, le=100)


# --- Tracker Schemas ---

class SaTarget(_CamelModel):
    """One month of the SA season."""
    month: str
    target: float = Field(..., ge=0, le=100, description="Cumulative target %")
    completed: float = Field(0, ge=0, le=100, description="Actual completion %")
    jobs_completed: int = Field(0, ge=0)
    total_jobs: int = Field(0, ge=0)
    team_breakdown: Optional[List[TeamBreakdown]] = None
    new_clients: Optional[int] = Field(None, ge=0, description="Jobs added this month")


class MonthlyThroughput(_CamelModel):
    """Minimal forecaster input row."""
    jobs_completed: int = Field(0, ge=0)
    total_jobs: int = Field(0, ge=0)


class SaJob(_CamelModel):
    """Single SA return job."""
    id: str
    data_date: date = Field(..., description="When the client's data became available")
    chase_events: List[date] = Field(default_factory=list)
    submitted_date: Optional[date] = None

    @property
    def is_filed(self) -> bool:
        return self.submitted_date is not None

    @property
    def chase_count(self) -> int:
        return len(self.chase_events)


# --- Forecast Records ---

@dataclass(frozen=True)
class ProjectionPoint:
    month: str
    projected_jobs: int
    projected_completion: float


@dataclass(frozen=True)
class SaForecast:
    """Year-end projection for the organization or a single team"""
    completed_jobs: int
    total_jobs: int
    months_with_data: int
    avg_monthly_rate: float
    months_remaining: int
    projected_total_jobs: float
    forecasted_completion: float   # %, 1 decimal, capped at 100
    is_on_track: bool              # forecasted_completion >= 99
    required_monthly_rate: int
    projected_shortfall: int
    projection: List[ProjectionPoint] = field(default_factory=list)
    team_name: Optional[str] = None


@dataclass(frozen=True)
class SeasonProgress:
    """Cumulative completion against the month's cumulative target."""
    month: str
    target: float
    actual: float
    jobs_completed: int
    total_jobs: int
    gap: float                     # target - actual, negative when ahead

    @property
    def on_target(self) -> bool:
        return self.actual >= self.target

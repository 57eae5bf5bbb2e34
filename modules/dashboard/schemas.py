# modules/dashboard/schemas.py

from dataclasses import dataclass
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class MonthlyKpiRecord(BaseModel):
    """One month of KPI percentages for a staff member."""
    staff_id: str
    month: str = Field(..., description="YYYY-MM")
    accounts: float = Field(0, ge=0, le=100)
    vat: float = Field(0, ge=0, le=100)
    sa: float = Field(0, ge=0, le=100)
    team_name: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator('month')
    @classmethod
    def month_format(cls, v: str) -> str:
        v = v.strip()
        parts = v.split("-")
        if len(parts) != 2 or len(parts[0]) != 4 or not all(p.isdigit() for p in parts) or not 1 <= int(parts[1]) <= 12:
            raise ValueError(f"month must be YYYY-MM (got '{v}')")
        return f"{parts[0]}-{int(parts[1]):02d}"

    @property
    def year(self) -> int:
        return int(self.month[:4])

    @property
    def month_number(self) -> int:
        return int(self.month[5:7])


@dataclass(frozen=True)
class MonthlyPoints:
    """Fixed-cap points of one month, before and after seasonal adjustment"""
    month: str
    accounts_points: float
    vat_points: float
    sa_points: float
    raw_total: float          # accounts + vat + sa points
    adjustment: str           # standard / non_sa_rescale / sa_missing_penalty
    seasonal_factor: float
    adjusted_total: float     # after branch + seasonal multiplier, capped at 100
    bonus_amount: int = 0


@dataclass(frozen=True)
class Badge:
    id: str
    name: str
    description: str
    icon: str
    criteria: str

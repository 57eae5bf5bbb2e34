# core/schemas.py
"""
Shared schemas: fiscal periods, KPI categories and the KPI weight
configuration read by every calculation.
"""

from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class FiscalPeriod(str, Enum):
    """Quarters of an April-start fiscal year."""
    Q1 = "Q1"  # Apr-Jun
    Q2 = "Q2"  # Jul-Sep
    Q3 = "Q3"  # Oct-Dec
    Q4 = "Q4"  # Jan-Mar


class KpiCategory(str, Enum):
    ACCOUNTS = "accounts"
    VAT = "vat"
    SA = "sa"


class KpiWeights(BaseModel):
    """Point weight per KPI plus the bonus pool divisor."""
    accounts_weight: float = Field(40, ge=0, description="Max points for Accounts")
    vat_weight: float = Field(30, ge=0, description="Max points for VAT")
    sa_weight: float = Field(30, ge=0, description="Max points for SA returns")
    bonus_pool_divisor: float = Field(4, gt=0, description="Monthly salary / divisor = bonus pool")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @property
    def total_weight(self) -> float:
        return self.accounts_weight + self.vat_weight + self.sa_weight

    def weight_for(self, category: KpiCategory) -> float:
        return getattr(self, f"{KpiCategory(category).value}_weight")

from dataclasses import dataclass
from typing import Dict, List, Optional
import logging

from core.config import Settings, settings as default_settings
from core.schemas import KpiWeights

logger = logging.getLogger("ConfigService")

WEIGHT_FIELDS = ("accounts_weight", "vat_weight", "sa_weight")
WEIGHT_TOTAL = 100.0
ROUNDING_TOLERANCE = 0.01


@dataclass
class PerformanceThresholds:
    """Band thresholds for a kind of score"""
    kind: str
    excellent: float
    good: float
    fair: Optional[float] = None
    color_excellent: str = "green"
    color_good: str = "amber"
    color_critical: str = "red"
    label_excellent: str = "Excellent"
    label_good: str = "Good"
    label_fair: str = "Fair"
    label_critical: str = "Needs Improvement"

    def get_color(self, score: float) -> str:
        """Returns the color for the score"""
        if score >= self.excellent:
            return self.color_excellent
        elif score >= self.good:
            return self.color_good
        else:
            return self.color_critical

    def get_label(self, score: float) -> str:
        """Returns the label for the score"""
        if score >= self.excellent:
            return self.label_excellent
        elif score >= self.good:
            return self.label_good
        elif self.fair is not None and score >= self.fair:
            return self.label_fair
        else:
            return self.label_critical


THRESHOLDS: Dict[str, PerformanceThresholds] = {
    # Monthly KPI percentage (score cards)
    "kpi": PerformanceThresholds(kind="kpi", excellent=90.0, good=80.0),
    # Total bonus score out of 100
    "bonus": PerformanceThresholds(kind="bonus", excellent=90.0, good=75.0, fair=60.0),
    # Team dashboard total points
    "team": PerformanceThresholds(kind="team", excellent=85.0, good=70.0),
}


KPI_PRESETS: Dict[str, Dict] = {
    "accounting-standard": {
        "name": "Accounting Firm (Standard)",
        "weights": KpiWeights(accounts_weight=40, vat_weight=30, sa_weight=30, bonus_pool_divisor=4),
        "description": "Balanced weights for general accounting practices",
    },
    "accounting-sa-focus": {
        "name": "Accounting Firm (SA Focus)",
        "weights": KpiWeights(accounts_weight=30, vat_weight=20, sa_weight=50, bonus_pool_divisor=4),
        "description": "Higher weight on SA returns for practices with tax specialization",
    },
    "accounting-sme": {
        "name": "Small Business Accounting",
        "weights": KpiWeights(accounts_weight=50, vat_weight=30, sa_weight=20, bonus_pool_divisor=4),
        "description": "Emphasis on accounts production for small business specialists",
    },
    "bookkeeping": {
        "name": "Bookkeeping Focus",
        "weights": KpiWeights(accounts_weight=60, vat_weight=30, sa_weight=10, bonus_pool_divisor=4),
        "description": "Heavy emphasis on accounts production for bookkeeping services",
    },
    "tax-practice": {
        "name": "Tax Practice",
        "weights": KpiWeights(accounts_weight=20, vat_weight=30, sa_weight=50, bonus_pool_divisor=4),
        "description": "Priority on tax return preparation for tax specialists",
    },
}


class ConfigService:
    """Builds and maintains the KPI weight configuration. No persistence."""

    @classmethod
    def get_kpi_weights(cls, config: Optional[Settings] = None) -> KpiWeights:
        """Weights from environment settings (.env or process env)."""
        cfg = config or default_settings
        return KpiWeights(
            accounts_weight=cfg.KPI_ACCOUNTS_WEIGHT,
            vat_weight=cfg.KPI_VAT_WEIGHT,
            sa_weight=cfg.KPI_SA_WEIGHT,
            bonus_pool_divisor=cfg.BONUS_POOL_DIVISOR
        )

    @classmethod
    def list_presets(cls) -> List[Dict]:
        return [
            {"key": key, "name": p["name"], "description": p["description"]}
            for key, p in KPI_PRESETS.items()
        ]

    @classmethod
    def get_preset(cls, key: str) -> KpiWeights:
        """
        Raises:
            ValueError: If the preset does not exist
        """
        preset = KPI_PRESETS.get(key)
        if preset is None:
            raise ValueError(f"Unknown KPI preset '{key}'. Available: {', '.join(KPI_PRESETS)}")
        return preset["weights"]

    @classmethod
    def get_thresholds(cls, kind: str) -> PerformanceThresholds:
        thresholds = THRESHOLDS.get(kind)
        if thresholds is None:
            raise ValueError(f"Unknown threshold kind '{kind}'")
        return thresholds

    @classmethod
    def validate_weights(cls, weights: KpiWeights) -> List[str]:
        """Returns error messages; empty list = valid."""
        errors = []
        total = weights.total_weight
        if abs(total - WEIGHT_TOTAL) > ROUNDING_TOLERANCE:
            errors.append(f"KPI weights must sum to 100%. Current total: {total:g}%")
        return errors

    @classmethod
    def rebalance_weights(cls, weights: KpiWeights, field: str, value: float) -> KpiWeights:
        """
        Sets one weight and redistributes the difference across the other two
        in proportion to their previous values, so the total stays at 100.

        Raises:
            ValueError: If field is not a weight or value is outside 0-100
        """
        if field not in WEIGHT_FIELDS:
            raise ValueError(f"'{field}' is not a KPI weight (expected one of {', '.join(WEIGHT_FIELDS)})")
        if not 0 <= value <= WEIGHT_TOTAL:
            raise ValueError(f"{field} must be between 0 and 100 (got {value})")

        old_value = getattr(weights, field)
        difference = value - old_value
        if difference == 0:
            return weights

        other_keys = [k for k in WEIGHT_FIELDS if k != field]
        current = {k: getattr(weights, k) for k in WEIGHT_FIELDS}
        updated = dict(current)
        updated[field] = value

        others_total = WEIGHT_TOTAL - old_value
        for key in other_keys:
            if others_total > 0:
                proportion = current[key] / others_total
            else:
                # The changed weight held all 100 points: split evenly
                proportion = 1 / len(other_keys)
            updated[key] = max(0.0, current[key] - (difference * proportion))

        rounding_adjustment = WEIGHT_TOTAL - sum(updated.values())
        if abs(rounding_adjustment) > ROUNDING_TOLERANCE:
            largest_key = max(other_keys, key=lambda k: updated[k])
            updated[largest_key] += rounding_adjustment

        logger.debug(f"Rebalanced weights {field}: {old_value} -> {value} => {updated}")
        return weights.model_copy(update=updated)

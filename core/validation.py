# core/validation.py
"""Shared input validation helpers."""

import logging
import math
from numbers import Real
from typing import Any

logger = logging.getLogger("Validation")

MIN_PERCENTAGE = 0.0
MAX_PERCENTAGE = 100.0


def is_valid_percentage(value: Any) -> bool:
    """True when value is a finite number in [0, 100] (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    if math.isnan(value) or math.isinf(value):
        return False
    return MIN_PERCENTAGE <= value <= MAX_PERCENTAGE


def require_positive(value: float, name: str) -> float:
    """
    Guards configuration values that act as divisors.

    Raises:
        ValueError: If value is not a finite number greater than 0
    """
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value) or value <= 0:
        logger.error(f"Invalid configuration: {name}={value!r}")
        raise ValueError(f"{name} must be greater than 0 (got {value!r})")
    return value

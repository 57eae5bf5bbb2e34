import calendar
from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float, decimals: int = 0) -> float:
    """
    Rounds halves away from zero (2.5 -> 3, 0.25 -> 0.3 with 1 decimal),
    unlike the built-in round() which rounds halves to even.

    Examples:
      round_half_up(62.5) -> 63
      round_half_up(87.25, 1) -> 87.3
    """
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if decimals == 0 else float(rounded)


def month_name(month: int) -> str:
    """1-12 -> 'January'..'December' (wraps around for values outside the range)."""
    return calendar.month_name[(month - 1) % 12 + 1]


def month_number(label: str) -> int:
    """
    Accepts full or abbreviated English month names ('January', 'jan').

    Raises:
        ValueError: If the label is not a month name
    """
    key = label.strip().lower()
    for number in range(1, 13):
        if key in (calendar.month_name[number].lower(), calendar.month_abbr[number].lower()):
            return number
    raise ValueError(f"Unknown month name '{label}'")

"""Display helpers for rupiah amounts and percentages."""

from typing import Optional, Union

from budget_core.config import CURRENCY_PREFIX
from budget_core.risk import as_percent, round_half_up


def format_rupiah(amount: Union[float, int]) -> str:
    """Format an amount the id-ID way: dot thousands separator, no decimals.

    Example:
        >>> format_rupiah(1500000)
        'Rp 1.500.000'
        >>> format_rupiah(-2500)
        '-Rp 2.500'
    """
    grouped = f"{round_half_up(abs(amount)):,}".replace(",", ".")
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_PREFIX} {grouped}"


def format_percent(ratio: Optional[float]) -> str:
    """Whole-number percentage of a ratio, rounded to nearest.

    Example:
        >>> format_percent(0.505)
        '51%'
    """
    return f"{round_half_up(as_percent(ratio))}%"

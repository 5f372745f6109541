import math
from typing import Optional

MAX_SCORE = 100


def round_half_up(value: float) -> int:
    # round() would give banker's rounding (62.5 -> 62)
    return int(math.floor(value + 0.5))


def as_percent(ratio: Optional[float]) -> float:
    return (ratio or 0) * 100


def lifestyle_risk_score(realized_wants: float, target_wants: float, monthly_income: float) -> int:
    """How far lifestyle spending has eaten into its budget, 0 to 100."""
    if target_wants > 0:
        raw = min(MAX_SCORE, realized_wants / target_wants * 100)
    elif realized_wants > 0 and monthly_income > 0:
        # spending on wants with no wants budget at all
        raw = MAX_SCORE
    else:
        raw = 0

    return max(0, min(MAX_SCORE, round_half_up(raw)))


def emergency_completion_ratio(all_time_total: float, target_lifetime: float) -> Optional[float]:
    if target_lifetime <= 0:
        return None
    return all_time_total / target_lifetime

"""Alert tiers derived from a dashboard snapshot.

The headline risk card and the quick-alert banner use different warning
cut points (60 and 80). Both are kept as they are.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from budget_core.domain import DashboardSnapshot
from budget_core.risk import as_percent, round_half_up

HEADLINE_SAFE_MAX = 60
HEADLINE_WARNING_MAX = 99
BANNER_WARNING_ABOVE = 80
CRITICAL_SCORE = 100

EMERGENCY_CRITICAL_BELOW = 50
EMERGENCY_ACHIEVED_AT = 100

MISSING_DISPLAY = "--"


class RiskTier(str, Enum):
    SAFE = "safe"
    WARNING = "warning"
    CRITICAL = "critical"
    DATA_MISSING = "data_missing"


class EmergencyTier(str, Enum):
    CRITICAL = "critical"
    PROGRESS = "progress"
    ACHIEVED = "achieved"
    DATA_MISSING = "data_missing"


@dataclass(frozen=True)
class StatusReport:
    headline_risk: RiskTier
    banner_risk: RiskTier
    emergency: EmergencyTier
    risk_display: str
    emergency_display: str


def headline_risk_tier(score: float, monthly_income: float) -> RiskTier:
    if monthly_income == 0:
        return RiskTier.DATA_MISSING
    if score <= HEADLINE_SAFE_MAX:
        return RiskTier.SAFE
    if score <= HEADLINE_WARNING_MAX:
        return RiskTier.WARNING
    return RiskTier.CRITICAL


def banner_risk_tier(score: float, monthly_income: float) -> RiskTier:
    if monthly_income == 0:
        return RiskTier.DATA_MISSING
    if score >= CRITICAL_SCORE:
        return RiskTier.CRITICAL
    if score > BANNER_WARNING_ABOVE:
        return RiskTier.WARNING
    return RiskTier.SAFE


def emergency_tier(ratio: Optional[float], monthly_income: float) -> EmergencyTier:
    if monthly_income == 0:
        return EmergencyTier.DATA_MISSING
    percent = as_percent(ratio)
    if percent < EMERGENCY_CRITICAL_BELOW:
        return EmergencyTier.CRITICAL
    if percent < EMERGENCY_ACHIEVED_AT:
        return EmergencyTier.PROGRESS
    return EmergencyTier.ACHIEVED


def classify(snapshot: DashboardSnapshot) -> StatusReport:
    income = snapshot.monthly_income
    score = snapshot.lifestyle_risk_score
    ratio = snapshot.emergency_completion_ratio

    return StatusReport(
        headline_risk=headline_risk_tier(score, income),
        banner_risk=banner_risk_tier(score, income),
        emergency=emergency_tier(ratio, income),
        risk_display=MISSING_DISPLAY if income == 0 else f"{score}%",
        emergency_display=f"{round_half_up(as_percent(ratio))}%",
    )

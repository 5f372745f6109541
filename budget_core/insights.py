from dataclasses import dataclass
from typing import Tuple

from budget_core.domain import DashboardSnapshot
from budget_core.formatting import format_rupiah

INFO = "info"
POSITIVE = "positive"
NEGATIVE = "negative"


@dataclass(frozen=True)
class Insight:
    tone: str
    message: str


def financial_analysis(snapshot: DashboardSnapshot) -> Tuple[Insight, ...]:
    """Short written analysis of the current month, empty until there is activity."""
    income = snapshot.income
    expense = snapshot.expense
    balance = snapshot.cash_balance
    wants = snapshot.realized.wants
    target_wants = snapshot.targets.wants

    if income <= 0 and expense <= 0:
        return ()

    lines = []
    if income > 0:
        lines.append(Insight(INFO, f"Total income this month: {format_rupiah(income)}."))

    if balance > 0:
        lines.append(Insight(POSITIVE, f"Cash flow is positive by {format_rupiah(balance)}."))
    else:
        lines.append(Insight(NEGATIVE, f"Cash flow is negative: {format_rupiah(balance)}."))

    if target_wants > 0:
        if wants > target_wants:
            lines.append(Insight(
                NEGATIVE,
                f"Lifestyle spending ({format_rupiah(wants)}) is over its budget ({format_rupiah(target_wants)}).",
            ))
        else:
            lines.append(Insight(
                INFO,
                f"Lifestyle spending ({format_rupiah(wants)}) is within its budget ({format_rupiah(target_wants)}).",
            ))

    return tuple(lines)

from enum import Enum
from typing import Dict, Tuple

from budget_core.domain import (
    Kind,
    NEEDS,
    WANTS,
    SAVINGS,
    INVESTMENT,
    EMERGENCY_FUND,
    SALARY,
)


class Bucket(str, Enum):
    NEEDS = "needs"
    WANTS = "wants"
    SAVINGS = "savings"
    INVESTMENT = "investment"
    EMERGENCY = "emergency"
    INCOME = "income"
    UNCLASSIFIED = "unclassified"


BUDGET_BUCKETS = frozenset({
    Bucket.NEEDS,
    Bucket.WANTS,
    Bucket.SAVINGS,
    Bucket.INVESTMENT,
    Bucket.EMERGENCY,
})

_TABLE: Dict[Tuple[Kind, str], Bucket] = {
    (Kind.EXPENSE, NEEDS): Bucket.NEEDS,
    (Kind.EXPENSE, WANTS): Bucket.WANTS,
    (Kind.SAVING, SAVINGS): Bucket.SAVINGS,
    (Kind.SAVING, INVESTMENT): Bucket.INVESTMENT,
    (Kind.SAVING, EMERGENCY_FUND): Bucket.EMERGENCY,
}

# what the input form offers for each kind
CATEGORY_OPTIONS: Dict[Kind, Tuple[str, ...]] = {
    Kind.EXPENSE: (NEEDS, WANTS),
    Kind.INCOME: (SALARY,),
    Kind.SAVING: (SAVINGS, INVESTMENT, EMERGENCY_FUND),
}

CATEGORY_LABELS = {
    NEEDS: "Kebutuhan",
    WANTS: "Gaya Hidup",
    SAVINGS: "Tabungan",
    INVESTMENT: "Investasi",
    EMERGENCY_FUND: "Dana Darurat",
    SALARY: "Pemasukan",
}

KIND_LABELS = {
    Kind.EXPENSE: "Pengeluaran",
    Kind.INCOME: "Pemasukan",
    Kind.SAVING: "Tabungan",
}


def classify(kind: Kind, category: str) -> Bucket:
    try:
        kind = Kind(kind)
    except ValueError:
        return Bucket.UNCLASSIFIED
    if kind is Kind.INCOME:
        return Bucket.INCOME
    return _TABLE.get((kind, category), Bucket.UNCLASSIFIED)


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category)


def kind_label(kind) -> str:
    return KIND_LABELS.get(kind, getattr(kind, "value", str(kind)))

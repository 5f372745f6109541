from collections import defaultdict
from typing import Iterable

from budget_core.classifier import BUDGET_BUCKETS, Bucket, classify
from budget_core.domain import EMERGENCY_FUND, Kind, Realized, Transaction
from budget_core.transforms import by_category, iter_transactions


def aggregate(transactions: Iterable[Transaction]) -> Realized:
    """Fold the current-period transactions into realized totals.

    Plain addition per key, so the delivery order of the stream is irrelevant.
    """
    kind_totals: dict[Kind, float] = defaultdict(float)
    bucket_totals: dict[Bucket, float] = defaultdict(float)

    for t in transactions:
        if t.kind in (Kind.INCOME, Kind.EXPENSE):
            kind_totals[Kind(t.kind)] += t.amount
        bucket = classify(t.kind, t.category)
        if bucket in BUDGET_BUCKETS:
            bucket_totals[bucket] += t.amount

    income = kind_totals[Kind.INCOME]
    expense = kind_totals[Kind.EXPENSE]

    return Realized(
        income=income,
        expense=expense,
        cash_balance=income - expense,
        needs=bucket_totals[Bucket.NEEDS],
        wants=bucket_totals[Bucket.WANTS],
        savings=bucket_totals[Bucket.SAVINGS],
        investment=bucket_totals[Bucket.INVESTMENT],
        emergency_this_period=bucket_totals[Bucket.EMERGENCY],
    )


def emergency_total(transactions: Iterable[Transaction]) -> float:
    return sum(t.amount for t in iter_transactions(transactions, by_category(EMERGENCY_FUND)))

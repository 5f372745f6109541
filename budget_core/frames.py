from typing import Iterable

import pandas as pd

from budget_core.classifier import category_label, kind_label
from budget_core.domain import DashboardSnapshot, Kind, Transaction

BUDGET_COLUMNS = ["bucket", "target", "realized", "remaining", "pct_of_target"]
TRANSACTION_COLUMNS = ["date", "description", "type", "category", "signed_amount", "id"]


def budget_frame(snapshot: DashboardSnapshot) -> pd.DataFrame:
    """Target vs realized for the four monthly buckets, in chart order."""
    t = snapshot.targets
    r = snapshot.realized
    rows = [
        ("Kebutuhan", t.needs, r.needs),
        ("Gaya Hidup", t.wants, r.wants),
        ("Tabungan", t.savings, r.savings),
        ("Investasi", t.investment, r.investment),
    ]
    df = pd.DataFrame(rows, columns=["bucket", "target", "realized"])
    df["remaining"] = df["target"] - df["realized"]
    df["pct_of_target"] = (
        (df["realized"] / df["target"].where(df["target"] > 0) * 100)
        .fillna(0.0)
    )
    return df[BUDGET_COLUMNS]


def _signed(t: Transaction) -> float:
    if t.kind == Kind.EXPENSE:
        return -t.amount
    return t.amount


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    rows = [
        {
            "date": pd.Timestamp(t.occurred_at),
            "description": t.description,
            "type": kind_label(t.kind),
            "category": category_label(t.category),
            "signed_amount": _signed(t),
            "id": t.id,
        }
        for t in transactions
    ]
    if not rows:
        return pd.DataFrame(columns=TRANSACTION_COLUMNS)
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)

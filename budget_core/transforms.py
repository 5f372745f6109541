import json
from datetime import datetime
from typing import Callable, Iterable, Tuple

from budget_core.domain import DEFAULT_EMERGENCY_MONTHS, Kind, Profile, Transaction


def parse_timestamp(value) -> datetime:
    # store records may carry epoch milliseconds
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000)
    return datetime.fromisoformat(str(value))


def profile_from_record(data: dict | None) -> Profile:
    data = data or {}
    return Profile(
        monthly_income=float(data.get("monthly_income") or 0),
        emergency_fund_target_months=int(data.get("emergency_months") or DEFAULT_EMERGENCY_MONTHS),
    )


def transaction_from_record(data: dict) -> Transaction:
    amount = float(data["amount"])
    if amount <= 0:
        raise ValueError(f"transaction {data.get('id')} has non-positive amount {amount}")
    return Transaction(
        id=str(data["id"]),
        kind=Kind(data.get("kind") or data.get("type")),
        category=str(data.get("category", "")),
        amount=amount,
        occurred_at=parse_timestamp(data["timestamp"]),
        description=data.get("description", ""),
    )


def load_seed(path: str) -> Tuple[Profile, Tuple[Transaction, ...]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    profile = profile_from_record(data.get("profile"))
    transactions = tuple(transaction_from_record(t) for t in data.get("transactions", []))

    return profile, transactions


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def since(start: datetime):
    def _filter(t: Transaction) -> bool:
        return t.occurred_at >= start

    return _filter


def by_category(category: str):
    def _filter(t: Transaction) -> bool:
        return t.category == category

    return _filter


def iter_transactions(
    trans: Iterable[Transaction], pred: Callable[[Transaction], bool]
) -> Iterable[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def newest_first(trans: Iterable[Transaction]) -> Tuple[Transaction, ...]:
    return tuple(sorted(trans, key=lambda t: t.occurred_at, reverse=True))


def current_period(trans: Iterable[Transaction], start: datetime) -> Tuple[Transaction, ...]:
    return newest_first(iter_transactions(trans, since(start)))


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    return tuple(x for x in trans if x.id != t.id) + (t,)


def remove_transaction(
    trans: Tuple[Transaction, ...], tx_id: str
) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.id != tx_id, trans))

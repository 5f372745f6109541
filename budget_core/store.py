"""In-memory stand-in for the external document store.

It offers the same three live subscriptions the dashboard listens to:
the profile document, this month's transactions (newest first) and the
all-time emergency-fund total. Every write redelivers to the affected
subscribers, the way a snapshot listener would. Nothing is persisted.
"""
import logging
import uuid
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from budget_core.aggregation import emergency_total
from budget_core.collator import Stream, StreamCollator
from budget_core.domain import Kind, Profile, Transaction
from budget_core.transforms import (
    add_transaction,
    current_period,
    remove_transaction,
    start_of_month,
)

logger = logging.getLogger(__name__)


class _Subscription:
    def __init__(self, stream: Stream, on_next: Callable, on_error: Optional[Callable], since_ts: Optional[datetime]):
        self.stream = stream
        self.on_next = on_next
        self.on_error = on_error
        self.since = since_ts
        self.active = True

    def cancel(self) -> None:
        self.active = False


class InMemoryLedger:

    def __init__(self, profile: Optional[Profile] = None, transactions: Tuple[Transaction, ...] = ()):
        self._profile = profile
        self._transactions: Tuple[Transaction, ...] = tuple(transactions)
        self._subs: Dict[Stream, List[_Subscription]] = {s: [] for s in Stream}

    @property
    def profile(self) -> Optional[Profile]:
        return self._profile

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self._transactions

    def subscribe(
        self,
        stream: Stream,
        on_next: Callable,
        on_error: Optional[Callable] = None,
        since: Optional[datetime] = None,
    ) -> _Subscription:
        stream = Stream(stream)
        if stream is Stream.TRANSACTIONS and since is None:
            raise ValueError("the transactions stream needs a lower timestamp bound")
        sub = _Subscription(stream, on_next, on_error, since)
        self._subs[stream].append(sub)
        self._deliver(sub)
        return sub

    def save_profile(self, profile: Profile) -> None:
        self._profile = profile
        self._notify(Stream.PROFILE)

    def add_transaction(
        self,
        kind: Kind,
        category: str,
        amount: float,
        description: str = "",
        occurred_at: Optional[datetime] = None,
        tx_id: Optional[str] = None,
    ) -> Transaction:
        occurred_at = occurred_at or datetime.now()
        tx = Transaction(
            id=tx_id or f"{int(occurred_at.timestamp() * 1000)}-{uuid.uuid4().hex[:7]}",
            kind=Kind(kind),
            category=category,
            amount=amount,
            occurred_at=occurred_at,
            description=description,
        )
        self._transactions = add_transaction(self._transactions, tx)
        self._notify(Stream.TRANSACTIONS, Stream.EMERGENCY_TOTAL)
        return tx

    def delete_transaction(self, tx_id: str) -> bool:
        before = len(self._transactions)
        self._transactions = remove_transaction(self._transactions, tx_id)
        if len(self._transactions) == before:
            return False
        self._notify(Stream.TRANSACTIONS, Stream.EMERGENCY_TOTAL)
        return True

    def fail(self, stream: Stream, error: BaseException) -> None:
        for sub in self._active(Stream(stream)):
            if sub.on_error is not None:
                sub.on_error(error)

    def _active(self, stream: Stream) -> List[_Subscription]:
        self._subs[stream] = [s for s in self._subs[stream] if s.active]
        return list(self._subs[stream])

    def _notify(self, *streams: Stream) -> None:
        for stream in streams:
            for sub in self._active(stream):
                self._deliver(sub)

    def _deliver(self, sub: _Subscription) -> None:
        if sub.stream is Stream.PROFILE:
            if self._profile is not None:
                sub.on_next(self._profile)
        elif sub.stream is Stream.TRANSACTIONS:
            sub.on_next(current_period(self._transactions, sub.since))
        else:
            sub.on_next(emergency_total(self._transactions))


def connect(collator: StreamCollator, ledger: InMemoryLedger, now: Optional[datetime] = None) -> List[_Subscription]:
    """Wire the three ledger subscriptions into the collator and mark it ready."""
    now = now or datetime.now()

    if ledger.profile is None:
        logger.info("no profile found, creating default")
        ledger.save_profile(Profile())

    def on_error(stream: Stream):
        def _handler(error: BaseException) -> None:
            collator.report_stream_failure(stream, error)
        return _handler

    subs = [
        ledger.subscribe(Stream.PROFILE, collator.apply_profile_update, on_error(Stream.PROFILE)),
        ledger.subscribe(
            Stream.TRANSACTIONS,
            collator.apply_transaction_set_update,
            on_error(Stream.TRANSACTIONS),
            since=start_of_month(now),
        ),
        ledger.subscribe(
            Stream.EMERGENCY_TOTAL,
            collator.apply_all_time_aggregate_update,
            on_error(Stream.EMERGENCY_TOTAL),
        ),
    ]
    collator.set_ready(True)
    return subs

"""Stream collator: the single writer of the world state.

Three independent streams feed it (profile, this month's transactions, the
all-time emergency-fund total). Each delivery replaces one field of the
world state and, once the session is ready, triggers a full recomputation
whose result is published on the event bus. Callbacks run to completion one
at a time, so a recomputation never sees a half-applied update.
"""
import logging
from enum import Enum
from typing import Iterable, Optional

from budget_core.dashboard import build_snapshot
from budget_core.domain import DashboardSnapshot, Profile, Transaction, WorldState
from budget_core.errors import StreamDeliveryFailure
from budget_core.events import EventBus, SNAPSHOT_UPDATED, STREAM_FAILED
from budget_core.functional import Either
from budget_core.status import StatusReport, classify

logger = logging.getLogger(__name__)


class Stream(str, Enum):
    PROFILE = "profile"
    TRANSACTIONS = "transactions"
    EMERGENCY_TOTAL = "emergency_total"


class StreamCollator:

    def __init__(self, bus: Optional[EventBus] = None, world: Optional[WorldState] = None):
        self.bus = bus if bus is not None else EventBus()
        self._world = world if world is not None else WorldState.default()
        self._snapshot: Optional[DashboardSnapshot] = None
        self._status: Optional[StatusReport] = None
        self._stale: set[Stream] = set()

    @property
    def world(self) -> WorldState:
        return self._world

    @property
    def snapshot(self) -> Optional[DashboardSnapshot]:
        return self._snapshot

    @property
    def status(self) -> Optional[StatusReport]:
        return self._status

    @property
    def stale_streams(self) -> frozenset:
        return frozenset(self._stale)

    def apply_profile_update(self, profile: Optional[Profile]) -> None:
        self._world.profile = profile if profile is not None else Profile()
        self._delivered(Stream.PROFILE)

    def apply_transaction_set_update(self, transactions: Iterable[Transaction]) -> None:
        self._world.current_transactions = tuple(transactions)
        self._delivered(Stream.TRANSACTIONS)

    def apply_all_time_aggregate_update(self, total: float) -> None:
        self._world.all_time_emergency_total = total
        self._delivered(Stream.EMERGENCY_TOTAL)

    def report_stream_failure(self, stream: Stream, error: BaseException) -> StreamDeliveryFailure:
        """Keep the last good value for `stream` and tell the presentation layer.

        No recomputation: stale data is shown rather than undefined data.
        """
        stream = Stream(stream)
        failure = error if isinstance(error, StreamDeliveryFailure) else StreamDeliveryFailure(stream, error)
        self._stale.add(stream)
        logger.warning("keeping last known %s after delivery failure: %s", stream.value, failure.cause)
        self.bus.publish(STREAM_FAILED, {
            "stream": stream,
            "error": failure,
            "message": str(failure),
        })
        return failure

    def deliver(self, stream: Stream, result: Either) -> None:
        if result.is_left():
            self.report_stream_failure(stream, result.get_error())
            return

        value = result.get_or_else(None)
        stream = Stream(stream)
        if stream is Stream.PROFILE:
            self.apply_profile_update(value)
        elif stream is Stream.TRANSACTIONS:
            self.apply_transaction_set_update(value)
        else:
            self.apply_all_time_aggregate_update(value)

    def set_ready(self, ready: bool) -> None:
        was_ready = self._world.ready
        self._world.ready = bool(ready)
        if self._world.ready and not was_ready:
            logger.info("session ready, computing first snapshot")
            self.recompute()

    def reset(self) -> DashboardSnapshot:
        logger.info("resetting world state to defaults")
        self._world.profile = Profile()
        self._world.current_transactions = ()
        self._world.all_time_emergency_total = 0
        self._stale.clear()
        # always recompute so nothing stale stays on screen
        return self.recompute()

    def recompute(self) -> DashboardSnapshot:
        snapshot = build_snapshot(self._world)
        status = classify(snapshot)
        self._snapshot = snapshot
        self._status = status
        logger.debug(
            "recomputed snapshot: risk=%s emergency=%s",
            snapshot.lifestyle_risk_score,
            snapshot.emergency_completion_ratio,
        )
        self.bus.publish(SNAPSHOT_UPDATED, {
            "snapshot": snapshot,
            "status": status,
            "stale_streams": self.stale_streams,
        })
        return snapshot

    def _delivered(self, stream: Stream) -> None:
        self._stale.discard(stream)
        if self._world.ready:
            self.recompute()

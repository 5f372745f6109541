from datetime import datetime
import importlib

import pytest

from budget_core import config
from budget_core.collator import Stream, StreamCollator
from budget_core.domain import Kind, Profile, Realized, Targets, Transaction, WorldState
from budget_core.errors import StreamDeliveryFailure
from budget_core.events import EventBus, SNAPSHOT_UPDATED, STREAM_FAILED
from budget_core.functional import Left, Right
from budget_core.status import EmergencyTier, RiskTier


def make_tx(id, kind, category, amount):
    return Transaction(id=id, kind=kind, category=category, amount=amount,
                       occurred_at=datetime(2026, 10, 5), description=id)


def make_collator(ready=True):
    bus = EventBus()
    snapshots = []
    failures = []
    bus.subscribe(SNAPSHOT_UPDATED, lambda e, p: snapshots.append(p))
    bus.subscribe(STREAM_FAILED, lambda e, p: failures.append(p))
    collator = StreamCollator(bus=bus)
    collator.set_ready(ready)
    return collator, snapshots, failures


def test_no_recompute_before_ready():
    collator, snapshots, _ = make_collator(ready=False)
    collator.apply_profile_update(Profile(monthly_income=1_000_000))
    collator.apply_all_time_aggregate_update(500_000)
    assert snapshots == []
    assert collator.snapshot is None
    assert collator.world.profile.monthly_income == 1_000_000


def test_becoming_ready_recomputes_once():
    collator, snapshots, _ = make_collator(ready=False)
    collator.apply_profile_update(Profile(monthly_income=1_000_000))
    collator.set_ready(True)
    collator.set_ready(True)
    assert len(snapshots) == 1
    assert snapshots[0]["snapshot"].targets.wants == pytest.approx(300_000)


def test_every_delivery_recomputes_when_ready():
    collator, snapshots, _ = make_collator()
    collator.apply_profile_update(Profile(monthly_income=1_000_000))
    collator.apply_transaction_set_update([make_tx("a", Kind.EXPENSE, "kebutuhan", 10)])
    collator.apply_all_time_aggregate_update(20)
    # one from set_ready plus three deliveries
    assert len(snapshots) == 4
    assert snapshots[-1]["snapshot"] is collator.snapshot


def test_overspend_example():
    collator, _, _ = make_collator()
    collator.apply_profile_update(Profile(monthly_income=5_000_000))
    collator.apply_transaction_set_update([
        make_tx("n", Kind.EXPENSE, "kebutuhan", 2_000_000),
        make_tx("w", Kind.EXPENSE, "gaya-hidup", 1_800_000),
    ])
    snap = collator.snapshot
    assert snap.targets.wants == pytest.approx(1_500_000)
    assert snap.realized.wants == 1_800_000
    assert snap.lifestyle_risk_score == 100
    assert collator.status.headline_risk == RiskTier.CRITICAL
    assert collator.status.banner_risk == RiskTier.CRITICAL


def test_zero_income_means_data_missing():
    collator, _, _ = make_collator()
    collator.apply_transaction_set_update([make_tx("w", Kind.EXPENSE, "gaya-hidup", 900)])
    collator.apply_all_time_aggregate_update(1_000)
    assert collator.status.headline_risk == RiskTier.DATA_MISSING
    assert collator.status.banner_risk == RiskTier.DATA_MISSING
    assert collator.status.emergency == EmergencyTier.DATA_MISSING
    assert collator.snapshot.emergency_completion_ratio is None


def test_emergency_half_way_is_progress():
    collator, _, _ = make_collator()
    collator.apply_profile_update(Profile(monthly_income=1_000_000, emergency_fund_target_months=6))
    collator.apply_all_time_aggregate_update(3_000_000)
    assert collator.snapshot.targets.emergency_lifetime == 6_000_000
    assert collator.snapshot.emergency_completion_ratio == 0.5
    assert collator.status.emergency == EmergencyTier.PROGRESS
    assert collator.status.emergency_display == "50%"


def test_recompute_is_idempotent():
    collator, _, _ = make_collator()
    collator.apply_profile_update(Profile(monthly_income=3_000_000, emergency_fund_target_months=3))
    collator.apply_transaction_set_update([
        make_tx("i", Kind.INCOME, "pemasukan", 3_000_000),
        make_tx("w", Kind.EXPENSE, "gaya-hidup", 700_000),
        make_tx("x", Kind.EXPENSE, "hobi", 50_000),
    ])
    first = collator.recompute()
    second = collator.recompute()
    assert first == second
    assert first is not second


def test_latest_value_wins_per_stream():
    collator, _, _ = make_collator()
    collator.apply_transaction_set_update([make_tx("a", Kind.EXPENSE, "kebutuhan", 100)])
    collator.apply_transaction_set_update([make_tx("b", Kind.EXPENSE, "kebutuhan", 40)])
    assert [t.id for t in collator.world.current_transactions] == ["b"]
    assert collator.snapshot.realized.needs == 40


def test_reset_gives_all_zero_snapshot():
    collator, snapshots, _ = make_collator()
    collator.apply_profile_update(Profile(monthly_income=5_000_000, emergency_fund_target_months=3))
    collator.apply_transaction_set_update([make_tx("w", Kind.EXPENSE, "gaya-hidup", 10)])
    collator.apply_all_time_aggregate_update(99)
    before = len(snapshots)

    snap = collator.reset()

    assert len(snapshots) == before + 1
    assert collator.world.profile == Profile(0, 6)
    assert collator.world.current_transactions == ()
    assert snap.targets == Targets()
    assert snap.realized == Realized()
    assert snap.emergency_lifetime_total == 0
    assert snap.lifestyle_risk_score == 0
    assert collator.status.headline_risk == RiskTier.DATA_MISSING
    assert collator.status.banner_risk == RiskTier.DATA_MISSING
    assert collator.status.emergency == EmergencyTier.DATA_MISSING


def test_reset_recomputes_even_when_not_ready():
    collator, snapshots, _ = make_collator(ready=False)
    collator.reset()
    assert len(snapshots) == 1
    assert collator.world.ready is False


def test_reset_defaults_ignore_environment(monkeypatch):
    monkeypatch.setenv("BUDGET_DEFAULT_EMERGENCY_MONTHS", "0")
    importlib.reload(config)
    collator, snapshots, _ = make_collator()
    collator.apply_profile_update(Profile(monthly_income=1_000_000, emergency_fund_target_months=2))

    collator.reset()

    assert collator.world.profile == Profile(0, 6)
    assert snapshots[-1]["snapshot"].emergency_fund_target_months == 6


def test_missing_profile_document_falls_back_to_default():
    collator, snapshots, failures = make_collator()
    collator.apply_profile_update(Profile(monthly_income=3_000_000, emergency_fund_target_months=3))

    collator.deliver(Stream.PROFILE, Right(None))

    assert collator.world.profile == Profile()
    assert failures == []
    assert snapshots[-1]["snapshot"].monthly_income == 0
    assert snapshots[-1]["snapshot"].emergency_fund_target_months == 6
    assert collator.status.headline_risk == RiskTier.DATA_MISSING


def test_failed_delivery_keeps_last_good_value():
    collator, snapshots, failures = make_collator()
    collator.apply_profile_update(Profile(monthly_income=2_000_000))
    count = len(snapshots)

    failure = collator.report_stream_failure(Stream.PROFILE, RuntimeError("permission denied"))

    assert isinstance(failure, StreamDeliveryFailure)
    assert failure.stream == Stream.PROFILE
    assert len(snapshots) == count
    assert collator.world.profile.monthly_income == 2_000_000
    assert collator.stale_streams == {Stream.PROFILE}
    assert failures[0]["stream"] == Stream.PROFILE
    assert "permission denied" in failures[0]["message"]


def test_failure_in_one_stream_does_not_block_others():
    collator, snapshots, _ = make_collator()
    collator.report_stream_failure(Stream.TRANSACTIONS, RuntimeError("offline"))
    collator.apply_all_time_aggregate_update(1_234)
    assert snapshots[-1]["snapshot"].emergency_lifetime_total == 1_234
    assert snapshots[-1]["stale_streams"] == {Stream.TRANSACTIONS}

    collator.apply_transaction_set_update([])
    assert collator.stale_streams == frozenset()


def test_deliver_dispatches_either():
    collator, snapshots, failures = make_collator()
    collator.deliver(Stream.PROFILE, Right(Profile(monthly_income=1_000)))
    collator.deliver(Stream.EMERGENCY_TOTAL, Right(250))
    collator.deliver(Stream.TRANSACTIONS, Left(RuntimeError("boom")))
    assert collator.world.profile.monthly_income == 1_000
    assert collator.world.all_time_emergency_total == 250
    assert len(failures) == 1
    assert failures[0]["stream"] == Stream.TRANSACTIONS


def test_collator_uses_given_world():
    world = WorldState(profile=Profile(monthly_income=10), ready=True)
    collator = StreamCollator(world=world)
    snap = collator.recompute()
    assert collator.world is world
    assert snap.targets.needs == 5


def test_collators_do_not_share_state():
    a = StreamCollator()
    b = StreamCollator()
    a.apply_profile_update(Profile(monthly_income=1))
    assert b.world.profile.monthly_income == 0
    assert a.bus is not b.bus

import pytest

from budget_core.allocation import allocate
from budget_core.domain import Profile, Targets


def test_fixed_policy_split():
    t = allocate(Profile(monthly_income=5_000_000, emergency_fund_target_months=6))
    assert t.needs == pytest.approx(2_500_000)
    assert t.wants == pytest.approx(1_500_000)
    assert t.savings == pytest.approx(500_000)
    assert t.investment == pytest.approx(500_000)
    assert t.emergency_lifetime == pytest.approx(30_000_000)


@pytest.mark.parametrize("income", [0, 1, 1234.56, 3_333_333, 5_000_000, 987_654_321])
def test_monthly_targets_sum_to_income(income):
    t = allocate(Profile(monthly_income=income))
    assert t.needs + t.wants + t.savings + t.investment == pytest.approx(income)


def test_zero_income_gives_zero_targets():
    assert allocate(Profile()) == Targets()
    assert allocate(Profile(monthly_income=0, emergency_fund_target_months=12)).emergency_lifetime == 0


def test_emergency_target_follows_months():
    t = allocate(Profile(monthly_income=1_000_000, emergency_fund_target_months=3))
    assert t.emergency_lifetime == 3_000_000


def test_savings_allocation_card():
    t = allocate(Profile(monthly_income=2_000_000))
    assert t.savings_allocation == pytest.approx(400_000)


def test_allocate_is_memoized_per_profile():
    p = Profile(monthly_income=4_200_000, emergency_fund_target_months=4)
    assert allocate(p) is allocate(Profile(monthly_income=4_200_000, emergency_fund_target_months=4))


def test_allocate_cache_is_bounded():
    assert allocate.cache_info().maxsize == 128

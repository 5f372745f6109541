from functools import lru_cache

from budget_core.domain import Profile, Targets

# fixed 50/30/10/10 policy
NEEDS_SHARE = 0.50
WANTS_SHARE = 0.30
SAVINGS_SHARE = 0.10
INVESTMENT_SHARE = 0.10


@lru_cache(maxsize=128)
def allocate(profile: Profile) -> Targets:
    income = profile.monthly_income or 0
    if income <= 0:
        return Targets()

    return Targets(
        needs=income * NEEDS_SHARE,
        wants=income * WANTS_SHARE,
        savings=income * SAVINGS_SHARE,
        investment=income * INVESTMENT_SHARE,
        emergency_lifetime=income * profile.emergency_fund_target_months,
    )

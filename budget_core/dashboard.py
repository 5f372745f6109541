from budget_core.aggregation import aggregate
from budget_core.allocation import allocate
from budget_core.domain import DashboardSnapshot, WorldState
from budget_core.risk import emergency_completion_ratio, lifestyle_risk_score


def build_snapshot(world: WorldState) -> DashboardSnapshot:
    """Derive the full dashboard from the world state. Reads nothing else."""
    profile = world.profile
    income = profile.monthly_income or 0
    targets = allocate(profile)
    realized = aggregate(world.current_transactions)

    return DashboardSnapshot(
        monthly_income=income,
        emergency_fund_target_months=profile.emergency_fund_target_months,
        targets=targets,
        realized=realized,
        emergency_lifetime_total=world.all_time_emergency_total,
        lifestyle_risk_score=lifestyle_risk_score(realized.wants, targets.wants, income),
        emergency_completion_ratio=emergency_completion_ratio(
            world.all_time_emergency_total, targets.emergency_lifetime
        ),
    )

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Kind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    SAVING = "saving"


# category values as stored on transactions
NEEDS = "kebutuhan"
WANTS = "gaya-hidup"
SAVINGS = "tabungan"
INVESTMENT = "investasi"
EMERGENCY_FUND = "dana-darurat"
SALARY = "pemasukan"

# fixed, not configuration
DEFAULT_EMERGENCY_MONTHS = 6


@dataclass(frozen=True)
class Profile:
    monthly_income: float = 0
    emergency_fund_target_months: int = DEFAULT_EMERGENCY_MONTHS


@dataclass(frozen=True)
class Transaction:
    id: str
    kind: Kind
    category: str          # free text, unknown values are tolerated
    amount: float          # always positive, direction comes from kind
    occurred_at: datetime
    description: str = ""


# Ideal allocation derived from the profile
@dataclass(frozen=True)
class Targets:
    needs: float = 0
    wants: float = 0
    savings: float = 0
    investment: float = 0
    emergency_lifetime: float = 0

    @property
    def savings_allocation(self) -> float:
        return self.savings + self.investment


# What actually moved during the current period
@dataclass(frozen=True)
class Realized:
    income: float = 0
    expense: float = 0
    cash_balance: float = 0
    needs: float = 0
    wants: float = 0
    savings: float = 0
    investment: float = 0
    emergency_this_period: float = 0


@dataclass(frozen=True)
class DashboardSnapshot:
    monthly_income: float
    emergency_fund_target_months: int
    targets: Targets
    realized: Realized
    emergency_lifetime_total: float
    lifestyle_risk_score: int
    emergency_completion_ratio: Optional[float]

    @property
    def income(self) -> float:
        return self.realized.income

    @property
    def expense(self) -> float:
        return self.realized.expense

    @property
    def cash_balance(self) -> float:
        return self.realized.cash_balance


@dataclass
class WorldState:
    """Latest known value of every input stream.

    Owned and mutated by a single StreamCollator; everything else only reads it.
    """
    profile: Profile = field(default_factory=Profile)
    current_transactions: tuple[Transaction, ...] = ()
    all_time_emergency_total: float = 0
    ready: bool = False

    @classmethod
    def default(cls, ready: bool = False) -> "WorldState":
        return cls(ready=ready)

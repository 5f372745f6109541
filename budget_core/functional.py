from abc import ABC, abstractmethod
from typing import TypeVar, Generic
from budget_core.classifier import CATEGORY_OPTIONS
from budget_core.domain import Kind, Profile

T = TypeVar('T')
E = TypeVar('E')


class Either(Generic[E, T], ABC):

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_left(self) -> bool:
        pass

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Generic[E, T], Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_left(self) -> bool:
        return False

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Generic[E, T], Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def get_or_else(self, default: T) -> T:
        return default

    def is_left(self) -> bool:
        return True

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


# --- Write-boundary validation. Failures are shown to the user and never
# reach the collator; only confirmed stream deliveries do.

def validate_profile_input(monthly_income: float, emergency_months: int) -> Either[dict, Profile]:
    if monthly_income is None or monthly_income <= 0:
        return Left({
            "error": "invalid_income",
            "message": "Monthly income must be greater than 0",
            "monthly_income": monthly_income,
        })

    if emergency_months is None or emergency_months < 1:
        return Left({
            "error": "invalid_emergency_months",
            "message": "Emergency fund target must be at least 1 month",
            "emergency_months": emergency_months,
        })

    return Right(Profile(
        monthly_income=float(monthly_income),
        emergency_fund_target_months=int(emergency_months),
    ))


def validate_transaction_input(
    kind: str,
    category: str,
    amount: float,
    description: str,
) -> Either[dict, dict]:

    try:
        parsed_kind = Kind(kind)
    except ValueError:
        return Left({
            "error": "unknown_kind",
            "message": f"Unknown transaction type {kind}",
            "kind": kind,
        })

    if category not in CATEGORY_OPTIONS[parsed_kind]:
        return Left({
            "error": "category_kind_mismatch",
            "message": f"Category {category} is not available for {parsed_kind.value}",
            "kind": parsed_kind.value,
            "category": category,
        })

    if amount is None or amount <= 0:
        return Left({
            "error": "invalid_amount",
            "message": "Transaction amount must be greater than 0",
            "amount": amount,
        })

    cleaned = (description or "").strip()
    if not cleaned:
        return Left({
            "error": "empty_description",
            "message": "Description must not be empty",
        })

    return Right({
        "kind": parsed_kind,
        "category": category,
        "amount": float(amount),
        "description": cleaned,
    })

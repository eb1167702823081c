"""Balance engine package."""

from travel_budget.engine.balance import (
    BalanceEngine,
    compute_cumulative_balance,
    resolve_name,
)
from travel_budget.engine.errors import (
    BudgetLookupError,
    UnknownCityCapError,
    UnknownCityError,
    UnknownDayError,
)

__all__ = [
    "BalanceEngine",
    "BudgetLookupError",
    "UnknownCityCapError",
    "UnknownCityError",
    "UnknownDayError",
    "compute_cumulative_balance",
    "resolve_name",
]

"""Report and query package."""

from travel_budget.queries.reports import BudgetReporter, CityBalance

__all__ = ["BudgetReporter", "CityBalance"]

"""
Report and Query Layer

DESIGN DECISION: Everything here is READ-ONLY.
The reporter formats what the documents say; it never changes state and
never triggers a save.

Two independent views of a city exist:
- the per-day remaining amounts tracked by the balance engine
- the city cap, checked against the expense log on every query

city_balance() uses only the second one.
"""

from typing import Optional

from pydantic import BaseModel

from travel_budget.engine import (
    BudgetLookupError,
    UnknownCityCapError,
    resolve_name,
)
from travel_budget.models.budget import (
    BudgetConfig,
    BudgetState,
    LogEntry,
    LogEntryKind,
    day_index,
)
from travel_budget.models.commands import ReportMode


class CityBalance(BaseModel):
    """Spend against one city's cap."""

    city: str
    cap: float
    spent: float

    @property
    def remaining(self) -> float:
        return self.cap - self.spent


class BudgetReporter:
    """
    Formats replies for the chat.

    All amounts are rendered with two decimals.
    """

    def __init__(
        self,
        config: BudgetConfig,
        state: BudgetState,
        log: list[LogEntry],
        currency_label: str = "euros",
    ):
        self._config = config
        self._state = state
        self._log = log
        self._currency = currency_label

    def _money(self, amount: float) -> str:
        return f"{amount:.2f} {self._currency}"

    def expense_confirmation(self, entry: LogEntry) -> str:
        """Reply to a registered expense."""
        balance = (
            entry.balance_after
            if entry.balance_after is not None
            else self._state.cumulative_balance
        )
        if entry.kind is LogEntryKind.POOL_EXPENSE:
            return (
                f"Noted on the free-spending pool. You have "
                f"{self._money(entry.remaining_after)} left for free spending. "
                f"Your cumulative balance is {self._money(balance)}."
            )
        return (
            f"Great, you have {self._money(entry.remaining_after)} left for this day. "
            f"You can spend it or leave it to add to the balance. "
            f"Your cumulative balance is {self._money(balance)}."
        )

    def global_balance_message(self) -> str:
        balance = self._state.cumulative_balance
        if balance >= 0:
            return f"So far you have saved {self._money(balance)}."
        return f"So far you have overspent by {self._money(abs(balance))}."

    def city_balance(self, city: str) -> CityBalance:
        """
        Spend against a city's cap, recomputed from the log.

        Raises:
            UnknownCityCapError: the city has no cap configured
        """
        resolved = resolve_name(city.strip(), list(self._config.city_cap))
        if resolved is None:
            raise UnknownCityCapError(city.strip())

        folded = resolved.casefold()
        spent = sum(
            entry.amount
            for entry in self._log
            if entry.kind is LogEntryKind.CITY_EXPENSE
            and entry.city is not None
            and entry.city.casefold() == folded
        )
        return CityBalance(city=resolved, cap=self._config.city_cap[resolved], spent=spent)

    def city_balance_message(self, city: str) -> str:
        try:
            balance = self.city_balance(city)
        except BudgetLookupError as e:
            return e.message
        return self.format_city_balance(balance)

    def format_city_balance(self, balance: CityBalance) -> str:
        summary = (
            f"{balance.city}: spent {self._money(balance.spent)} "
            f"of {self._money(balance.cap)}"
        )
        if balance.remaining >= 0:
            return f"{summary}, {self._money(balance.remaining)} remaining."
        return f"{summary}, overspent by {self._money(abs(balance.remaining))}."

    def budget_report(self, mode: ReportMode) -> str:
        """
        Day-by-day budget.

        PLANNED shows the configured allowances. ACTUAL shows what is left
        wherever a day (or the pool) has been used, the planned figure
        everywhere else, and ends with the cumulative balance.
        """
        actual = mode is ReportMode.ACTUAL
        lines = ["Current budget:" if actual else "Planned budget:"]

        for city in self._config.daily_allowance:
            lines.append(city)
            for key in self._config.sorted_days(city):
                amount = self._config.daily_allowance[city][key]
                if actual:
                    tracked = self._state.remaining_for(city, key)
                    if tracked is not None:
                        amount = tracked
                lines.append(f"  {_day_label(key)}: {amount:.2f}")

        lines.append("Free spending")
        if actual:
            pool = self._pool_available()
            lines.append(f"  available: {pool:.2f}")
            lines.append(self.global_balance_message())
        else:
            lines.append(f"  allocated: {self._config.pool_allowance:.2f}")

        return "\n".join(lines)

    def _pool_available(self) -> float:
        tracked: Optional[float] = self._state.pool_remaining
        return tracked if tracked is not None else self._config.pool_allowance


def _day_label(key: str) -> str:
    index = day_index(key)
    return f"day{index}" if index is not None else key

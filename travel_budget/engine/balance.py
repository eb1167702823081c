"""
Balance Engine

DESIGN DECISION: The cumulative balance is NEVER carried forward.
After every mutation it is recomputed from the budget, the set of
activated (city, day) keys and the full expense log:

    total_budget = sum(allowance of every activated key) + pool allowance
    total_spent  = sum(amount of every log entry)
    balance      = total_budget - total_spent

Note the asymmetry: a day only counts once someone spends against it,
while the pool allowance always counts, even if the pool was never used.
Reports and existing chats rely on this, so it is reproduced as is.

Because the log is the ground truth, an edited or repaired log file fixes
the balance on the next expense.
"""

from typing import Optional

from travel_budget.engine.errors import UnknownCityError, UnknownDayError
from travel_budget.models.budget import (
    BudgetConfig,
    BudgetState,
    LogEntry,
    LogEntryKind,
)


SPEND_KINDS = (LogEntryKind.CITY_EXPENSE, LogEntryKind.POOL_EXPENSE)


def compute_cumulative_balance(
    config: BudgetConfig,
    state: BudgetState,
    log: list[LogEntry],
) -> float:
    """Closed-form balance over config, activated keys and log."""
    total_budget = 0.0
    for city, key in state.activated_keys():
        allowance = config.allowance_for(city, key)
        # Keys dropped from the budget since they were activated count as 0
        if allowance is not None:
            total_budget += allowance
    total_budget += config.pool_allowance

    total_spent = sum(entry.amount for entry in log if entry.kind in SPEND_KINDS)

    return total_budget - total_spent


def resolve_name(name: str, known: list[str]) -> Optional[str]:
    """
    Match a user-typed name against configured names.

    Exact match wins; otherwise a unique case-insensitive match is used.
    Returns the configured spelling, or None.
    """
    if name in known:
        return name
    folded = name.casefold()
    matches = [candidate for candidate in known if candidate.casefold() == folded]
    return matches[0] if len(matches) == 1 else None


class BalanceEngine:
    """
    Applies expenses to the ledger documents.

    The engine works on the snapshot it was given and does not persist
    anything; the caller saves state and log afterwards. The budget is
    passed in at construction, there is no shared default budget.
    """

    def __init__(
        self,
        config: BudgetConfig,
        state: BudgetState,
        log: list[LogEntry],
    ):
        self._config = config
        self._state = state
        self._log = log

    @property
    def config(self) -> BudgetConfig:
        return self._config

    @property
    def state(self) -> BudgetState:
        return self._state

    @property
    def log(self) -> list[LogEntry]:
        return self._log

    def resolve_city(self, city: str) -> str:
        """Configured spelling of a city with a daily allowance."""
        resolved = resolve_name(city.strip(), list(self._config.daily_allowance))
        if resolved is None:
            raise UnknownCityError(city.strip())
        return resolved

    def recompute_balance(self) -> float:
        self._state.cumulative_balance = compute_cumulative_balance(
            self._config, self._state, self._log
        )
        return self._state.cumulative_balance

    def register_city_expense(self, amount: float, city: str, day: int) -> LogEntry:
        """
        Spend against a city's daily allowance.

        Raises:
            UnknownCityError: city has no daily allowance
            UnknownDayError: city has no allowance for this day

        Both are raised before anything is changed.
        """
        resolved = self.resolve_city(city)
        key = self._config.resolve_day_key(resolved, day)
        if key is None:
            raise UnknownDayError(resolved, day)
        allowance = self._config.allowance_for(resolved, key)

        remaining = self._state.remaining_for(resolved, key)
        if remaining is None:
            remaining = allowance

        # Overspending is allowed; remaining may go negative
        remaining -= amount
        self._state.set_remaining(resolved, key, remaining)

        entry = LogEntry(
            kind=LogEntryKind.CITY_EXPENSE,
            amount=amount,
            city=resolved,
            day=day,
            remaining_after=remaining,
        )
        return self._append(entry)

    def register_pool_expense(self, amount: float) -> LogEntry:
        """
        Spend against the free-spending pool.

        Never fails: with no pool configured the allowance is zero and the
        remaining simply goes negative.
        """
        remaining = self._state.pool_remaining
        if remaining is None:
            remaining = self._config.pool_allowance

        remaining -= amount
        self._state.pool_remaining = remaining

        entry = LogEntry(
            kind=LogEntryKind.POOL_EXPENSE,
            amount=amount,
            remaining_after=remaining,
        )
        return self._append(entry)

    def _append(self, entry: LogEntry) -> LogEntry:
        self._log.append(entry)
        entry.balance_after = self.recompute_balance()
        return entry

"""
Ledger Document Models for Travel Budget

Three documents make up the ledger:
1. BudgetConfig - what was planned (read-only for the whole run)
2. BudgetState  - what is left (mutated by every expense)
3. LogEntry list - what was spent (append-only)

The JSON documents use camelCase keys; the Python attributes use
snake_case. populate_by_name lets tests build models either way.

DESIGN DECISION: A (city, day) pair has two states. It is unactivated
until the first expense against it, and activated(amount) afterwards.
BudgetState.remaining_for() returns None for the first state and never
defaults to zero.
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


# Separator between city and day key in BudgetState.remaining
STATE_KEY_SEPARATOR = "||"

_DAY_INDEX_PATTERN = re.compile(r"(?<!\d)(\d{1,9})$")


def day_key(day: int) -> str:
    """Key used for a day index inside the budget and state documents."""
    return f"day_{day}"


def day_index(key: str) -> Optional[int]:
    """Numeric part of a day key ('day_12' -> 12), None if there is none."""
    match = _DAY_INDEX_PATTERN.search(key)
    return int(match.group(1)) if match else None


def state_key(city: str, key: str) -> str:
    return f"{city}{STATE_KEY_SEPARATOR}{key}"


def split_state_key(compound: str) -> tuple[str, str]:
    """Split a state key back into (city, day key)."""
    city, _, key = compound.partition(STATE_KEY_SEPARATOR)
    return city, key


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# BUDGET (read-only configuration document)
# =============================================================================

class BudgetConfig(BaseModel):
    """
    The planned budget for the trip.

    Loaded once per command and never written back.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    daily_allowance: dict[str, dict[str, float]] = Field(
        default_factory=dict,
        alias="dailyAllowance",
        description="Planned spend per city per day key"
    )
    city_cap: dict[str, float] = Field(
        default_factory=dict,
        alias="cityCap",
        description="Total cap per city, used only by city balance queries"
    )
    pool_allowance: float = Field(
        default=0.0,
        alias="poolAllowance",
        description="Shared free-spending budget, not tied to a city or day"
    )

    def allowance_for(self, city: str, key: str) -> Optional[float]:
        """Planned allowance for a (city, day key), None if not configured."""
        return self.daily_allowance.get(city, {}).get(key)

    def resolve_day_key(self, city: str, day: int) -> Optional[str]:
        """
        Configured key of a city's day, whatever its spelling.

        'day_3' is tried first; otherwise the one key whose trailing number
        is the day ('day3', 'dia_3'). None if absent or ambiguous.
        """
        days = self.daily_allowance.get(city, {})
        preferred = day_key(day)
        if preferred in days:
            return preferred
        matches = [key for key in days if day_index(key) == day]
        return matches[0] if len(matches) == 1 else None

    def sorted_days(self, city: str) -> list[str]:
        """Day keys of a city in ascending day order."""
        days = self.daily_allowance.get(city, {})

        def sort_key(key: str) -> tuple[bool, int, str]:
            index = day_index(key)
            return (index is None, index or 0, key)

        return sorted(days, key=sort_key)


# =============================================================================
# STATE (mutable document)
# =============================================================================

class BudgetState(BaseModel):
    """
    Remaining amounts and the cumulative balance.

    cumulative_balance is a derived value: the engine overwrites it after
    every mutation, so whatever was persisted is only trusted for display.
    """
    model_config = ConfigDict(populate_by_name=True)

    cumulative_balance: float = Field(
        default=0.0,
        alias="cumulativeBalance"
    )
    remaining: dict[str, float] = Field(
        default_factory=dict,
        description="Remaining allowance per activated 'city||day_N' key"
    )
    pool_remaining: Optional[float] = Field(
        default=None,
        alias="poolRemaining",
        description="Remaining free-spending pool, absent until first used"
    )

    def remaining_for(self, city: str, key: str) -> Optional[float]:
        """Tracked remaining for a (city, day key); None while unactivated."""
        return self.remaining.get(state_key(city, key))

    def set_remaining(self, city: str, key: str, amount: float) -> None:
        self.remaining[state_key(city, key)] = amount

    def activated_keys(self) -> list[tuple[str, str]]:
        return [split_state_key(compound) for compound in self.remaining]

    def to_document(self) -> dict:
        """Serialize for the state JSON file (poolRemaining omitted while absent)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# LOG (append-only document)
# =============================================================================

class LogEntryKind(str, Enum):
    """Kinds of entries in the expense log."""
    CITY_EXPENSE = "CITY_EXPENSE"
    POOL_EXPENSE = "POOL_EXPENSE"


class LogEntry(BaseModel):
    """
    A single registered expense.

    balance_after is stamped by the engine right after the balance is
    recomputed; nothing changes an entry after that.
    """
    model_config = ConfigDict(populate_by_name=True)

    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the expense was registered (UTC)"
    )
    kind: LogEntryKind
    amount: float
    city: Optional[str] = None
    day: Optional[int] = None
    remaining_after: float = Field(
        ...,
        alias="remainingAfter",
        description="Remaining for the day (or pool) right after this expense"
    )
    balance_after: Optional[float] = Field(
        default=None,
        alias="balanceAfter",
        description="Cumulative balance right after this expense"
    )

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


LOG_ADAPTER = TypeAdapter(list[LogEntry])


class LedgerSnapshot(BaseModel):
    """The three ledger documents as loaded from storage."""

    config: BudgetConfig = Field(default_factory=BudgetConfig)
    state: BudgetState = Field(default_factory=BudgetState)
    log: list[LogEntry] = Field(default_factory=list)

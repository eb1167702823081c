"""
Command Intents

Each model is one thing a chat message can ask the ledger to do.
The parser builds them; the orchestrator dispatches on their type.
"""

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class ReportMode(str, Enum):
    """Which figures a budget report shows."""
    PLANNED = "planned"
    ACTUAL = "actual"


class CityBalanceQuery(BaseModel):
    """'balance <city>': spend against the city cap."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    city: str = Field(..., min_length=1)


class ReportQuery(BaseModel):
    """'budget' or 'budget actual': the day-by-day report."""
    model_config = ConfigDict(frozen=True)

    mode: ReportMode


class GlobalBalanceQuery(BaseModel):
    """'balance': the cumulative balance."""
    model_config = ConfigDict(frozen=True)


class PoolExpense(BaseModel):
    """'spent X euros on random': an expense against the free pool."""
    model_config = ConfigDict(frozen=True)

    amount: float = Field(..., ge=0, allow_inf_nan=False)


class CityExpense(BaseModel):
    """'spent X euros on <city>, day N': an expense against a city day."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    amount: float = Field(..., ge=0, allow_inf_nan=False)
    city: str = Field(..., min_length=1)
    day: int = Field(..., ge=0)


Intent = Union[
    CityBalanceQuery,
    ReportQuery,
    GlobalBalanceQuery,
    PoolExpense,
    CityExpense,
]

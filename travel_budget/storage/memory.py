"""
In-Memory Storage Implementation

Keeps the three documents in memory. Used by the tests and by anything
embedding the ledger without a filesystem.
"""

from typing import Optional

from travel_budget.models.budget import (
    BudgetConfig,
    BudgetState,
    LedgerSnapshot,
    LogEntry,
)
from travel_budget.storage.interface import LedgerStorageInterface


class InMemoryLedgerStorage(LedgerStorageInterface):
    """
    Dict-backed ledger storage.

    load() hands out deep copies, so a caller mutating its snapshot does
    not change what is stored until it calls save().
    """

    def __init__(
        self,
        config: Optional[BudgetConfig] = None,
        state: Optional[BudgetState] = None,
        log: Optional[list[LogEntry]] = None,
    ):
        self._config = config or BudgetConfig()
        self._state = state or BudgetState()
        self._log = list(log or [])
        self.save_count = 0

    @property
    def state(self) -> BudgetState:
        return self._state.model_copy(deep=True)

    @property
    def log(self) -> list[LogEntry]:
        return [entry.model_copy(deep=True) for entry in self._log]

    def load(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            config=self._config.model_copy(deep=True),
            state=self.state,
            log=self.log,
        )

    def save(self, state: BudgetState, log: list[LogEntry]) -> bool:
        self._state = state.model_copy(deep=True)
        self._log = [entry.model_copy(deep=True) for entry in log]
        self.save_count += 1
        return True

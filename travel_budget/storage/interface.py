"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for ledger storage.
This allows us to:
1. Keep the three documents as JSON files next to the bot today
2. Use in-memory storage for testing
3. Swap in a real database later without touching the engine

The contract is deliberately small: load everything, save state and log.
There is no locking. Two commands saving at once means the last write
wins; callers are expected to handle one message at a time.
"""

from abc import ABC, abstractmethod

from travel_budget.models.budget import BudgetState, LedgerSnapshot, LogEntry


class LedgerStorageInterface(ABC):
    """
    Abstract interface for the ledger documents.

    Implementations must never raise from load(): a missing or corrupt
    document is replaced by its empty default and reported as a diagnostic.
    """

    @abstractmethod
    def load(self) -> LedgerSnapshot:
        """
        Load budget, state and log.

        Returns:
            A snapshot with defaults for any document that could not be read
        """
        pass

    @abstractmethod
    def save(self, state: BudgetState, log: list[LogEntry]) -> bool:
        """
        Overwrite the state and log documents wholesale.

        The budget document is never written.

        Returns:
            True if both documents were written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class DocumentLoadError(StorageError):
    """A ledger document exists but could not be read or parsed."""

    def __init__(self, document: str, path: str, reason: str):
        self.document = document
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load {document} document at {path}: {reason}")

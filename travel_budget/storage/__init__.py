"""
Storage Package

Provides the abstract ledger storage interface and its implementations.
JSON files are the production backend; the in-memory store backs tests.
"""

from travel_budget.storage.interface import (
    DocumentLoadError,
    LedgerStorageInterface,
    StorageError,
)
from travel_budget.storage.json_files import JsonFileLedgerStorage
from travel_budget.storage.memory import InMemoryLedgerStorage

__all__ = [
    # Interface
    "LedgerStorageInterface",
    # Exceptions
    "DocumentLoadError",
    "StorageError",
    # Implementations
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
]

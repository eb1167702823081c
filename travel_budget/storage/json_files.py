"""
JSON File Storage Implementation

DESIGN DECISION: Plain JSON files are the storage backend because:
1. The group can open and fix the budget in any text editor
2. No database setup required on the machine running the bot
3. A hand-edited log heals the balance on the next expense

TRADEOFFS:
- Every save rewrites both files completely
- No transactions and no locking (one operator, one message at a time)
- A corrupt file is replaced by an empty default on the next save
"""

import json
from pathlib import Path
from typing import Callable, Optional, TypeVar

from travel_budget.audit import AuditLogger
from travel_budget.config import StorageSettings
from travel_budget.models.budget import (
    LOG_ADAPTER,
    BudgetConfig,
    BudgetState,
    LedgerSnapshot,
    LogEntry,
)
from travel_budget.storage.interface import (
    DocumentLoadError,
    LedgerStorageInterface,
)


T = TypeVar("T")


class JsonFileLedgerStorage(LedgerStorageInterface):
    """
    Ledger storage backed by three JSON files.

    The budget file is read-only. State and log are rewritten after
    every mutation.
    """

    def __init__(
        self,
        budget_path: Path,
        state_path: Path,
        log_path: Path,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._budget_path = Path(budget_path)
        self._state_path = Path(state_path)
        self._log_path = Path(log_path)
        self._audit_logger = audit_logger or AuditLogger()

    @classmethod
    def from_settings(
        cls,
        settings: StorageSettings,
        audit_logger: Optional[AuditLogger] = None,
    ) -> "JsonFileLedgerStorage":
        return cls(
            budget_path=settings.budget_path,
            state_path=settings.state_path,
            log_path=settings.log_path,
            audit_logger=audit_logger,
        )

    def load(self) -> LedgerSnapshot:
        config = self._load_document(
            "budget", self._budget_path, BudgetConfig.model_validate_json, BudgetConfig
        )
        state = self._load_document(
            "state", self._state_path, BudgetState.model_validate_json, BudgetState
        )
        log = self._load_document(
            "log", self._log_path, LOG_ADAPTER.validate_json, list
        )
        return LedgerSnapshot(config=config, state=state, log=log)

    def save(self, state: BudgetState, log: list[LogEntry]) -> bool:
        state_saved = self._write_document("state", self._state_path, state.to_document())
        log_saved = self._write_document(
            "log", self._log_path, [entry.to_document() for entry in log]
        )
        return state_saved and log_saved

    def _load_document(
        self,
        document: str,
        path: Path,
        parse: Callable[[str], T],
        default: Callable[[], T],
    ) -> T:
        """Parse one document, falling back to its default on any failure."""
        try:
            return self._read(document, path, parse)
        except DocumentLoadError as e:
            self._audit_logger.log_document_load_failed(
                document=e.document,
                path=e.path,
                error_message=e.reason,
            )
            return default()

    def _read(self, document: str, path: Path, parse: Callable[[str], T]) -> T:
        if not path.exists():
            raise DocumentLoadError(document, str(path), "file not found")
        try:
            return parse(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise DocumentLoadError(document, str(path), str(e)) from e
        except ValueError as e:
            # pydantic's ValidationError (bad JSON or bad shape) is a ValueError
            raise DocumentLoadError(document, str(path), str(e)) from e

    def _write_document(self, document: str, path: Path, payload) -> bool:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps(payload, indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as e:
            self._audit_logger.log_document_save_failed(
                document=document,
                path=str(path),
                error_message=str(e),
            )
            return False
        return True

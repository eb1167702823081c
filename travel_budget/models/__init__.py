"""
Data Models Package

This package contains all Pydantic models used by the travel budget ledger.
All documents read from or written to storage conform to these schemas.
"""

from travel_budget.models.budget import (
    LOG_ADAPTER,
    STATE_KEY_SEPARATOR,
    BudgetConfig,
    BudgetState,
    LedgerSnapshot,
    LogEntry,
    LogEntryKind,
    day_index,
    day_key,
    split_state_key,
    state_key,
)
from travel_budget.models.commands import (
    CityBalanceQuery,
    CityExpense,
    GlobalBalanceQuery,
    Intent,
    PoolExpense,
    ReportMode,
    ReportQuery,
)
from travel_budget.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger documents
    "LOG_ADAPTER",
    "STATE_KEY_SEPARATOR",
    "BudgetConfig",
    "BudgetState",
    "LedgerSnapshot",
    "LogEntry",
    "LogEntryKind",
    "day_index",
    "day_key",
    "split_state_key",
    "state_key",
    # Commands
    "CityBalanceQuery",
    "CityExpense",
    "GlobalBalanceQuery",
    "Intent",
    "PoolExpense",
    "ReportMode",
    "ReportQuery",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

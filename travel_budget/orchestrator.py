"""
Main Orchestrator for Travel Budget

This module ties together the components and defines the one flow the
chat transport needs:

    message -> parse -> load -> engine or reporter -> save -> reply

DESIGN DECISION: Every message gets a full, fresh cycle.
The documents are loaded for each message and saved after each expense,
so nothing is cached between messages and a hand-edited file takes
effect on the next command.

The orchestrator enforces the boundaries:
- Unauthorized or unrecognised messages get no reply at all
- Unknown cities/days get a reply and change nothing
- Queries never write
- A failed save is logged; the reply is still sent
"""

from typing import Optional
from uuid import UUID

from travel_budget.audit import (
    AuditLogger,
    configure_logging,
    create_correlation_id,
)
from travel_budget.config import Settings, get_settings
from travel_budget.engine import BalanceEngine, BudgetLookupError
from travel_budget.models.budget import LedgerSnapshot, LogEntry
from travel_budget.models.commands import (
    CityBalanceQuery,
    CityExpense,
    GlobalBalanceQuery,
    Intent,
    PoolExpense,
    ReportQuery,
)
from travel_budget.parsing import CommandParser
from travel_budget.queries import BudgetReporter
from travel_budget.storage import JsonFileLedgerStorage, LedgerStorageInterface


class BudgetLedger:
    """
    Entry point for the chat transport.

    One instance can serve many messages; each call to handle_message()
    is independent. Messages must be handled one at a time: two
    concurrent expenses can overwrite each other's save.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        authorized_channel: str,
        currency_label: str = "euros",
        audit_logger: Optional[AuditLogger] = None,
        parser: Optional[CommandParser] = None,
    ):
        self._storage = storage
        self._currency_label = currency_label
        self._audit_logger = audit_logger or AuditLogger()
        self._parser = parser or CommandParser(authorized_channel)

    def handle_message(self, raw_text: str, channel_id: str) -> Optional[str]:
        """
        Handle one chat message.

        Returns:
            The reply text, or None when the ledger should stay silent
        """
        correlation_id = create_correlation_id()

        if not self._parser.is_authorized(channel_id):
            self._audit_logger.log_command_ignored(
                reason="unauthorized channel",
                channel_id=channel_id,
                correlation_id=correlation_id,
            )
            return None

        intent = self._parser.parse(raw_text, channel_id)
        if intent is None:
            self._audit_logger.log_command_ignored(
                reason="no matching command",
                channel_id=channel_id,
                correlation_id=correlation_id,
            )
            return None

        intent_name = type(intent).__name__
        self._audit_logger.log_command_received(
            intent=intent_name,
            correlation_id=correlation_id,
        )

        snapshot = self._storage.load()

        try:
            if isinstance(intent, (CityExpense, PoolExpense)):
                return self._register_expense(intent, snapshot, correlation_id)
            reply = self._answer_query(intent, snapshot)
        except BudgetLookupError as e:
            self._audit_logger.log_lookup_failed(
                error_type=type(e).__name__,
                message=e.message,
                correlation_id=correlation_id,
            )
            return e.message

        self._audit_logger.log_query_answered(
            intent=intent_name,
            correlation_id=correlation_id,
        )
        return reply

    def _register_expense(
        self,
        intent: Intent,
        snapshot: LedgerSnapshot,
        correlation_id: UUID,
    ) -> str:
        engine = BalanceEngine(snapshot.config, snapshot.state, snapshot.log)

        if isinstance(intent, CityExpense):
            entry = engine.register_city_expense(intent.amount, intent.city, intent.day)
        else:
            entry = engine.register_pool_expense(intent.amount)

        self._storage.save(engine.state, engine.log)
        self._log_expense(entry, correlation_id)

        return self._reporter(snapshot).expense_confirmation(entry)

    def _answer_query(self, intent: Intent, snapshot: LedgerSnapshot) -> str:
        reporter = self._reporter(snapshot)

        if isinstance(intent, CityBalanceQuery):
            return reporter.format_city_balance(reporter.city_balance(intent.city))
        if isinstance(intent, ReportQuery):
            return reporter.budget_report(intent.mode)
        if isinstance(intent, GlobalBalanceQuery):
            return reporter.global_balance_message()

        raise TypeError(f"Unsupported intent: {type(intent).__name__}")

    def _reporter(self, snapshot: LedgerSnapshot) -> BudgetReporter:
        return BudgetReporter(
            snapshot.config,
            snapshot.state,
            snapshot.log,
            currency_label=self._currency_label,
        )

    def _log_expense(self, entry: LogEntry, correlation_id: UUID) -> None:
        self._audit_logger.log_expense_registered(
            kind=entry.kind.value,
            amount=entry.amount,
            remaining_after=entry.remaining_after,
            balance_after=entry.balance_after,
            city=entry.city,
            day=entry.day,
            correlation_id=correlation_id,
        )


def create_ledger(
    settings: Optional[Settings] = None,
    storage: Optional[LedgerStorageInterface] = None,
) -> BudgetLedger:
    """
    Factory function to create a ready-to-use ledger.

    Args:
        settings: Settings to use; defaults to get_settings()
        storage: Storage override; defaults to the JSON files named
                 in the storage settings
    """
    settings = settings or get_settings()
    configure_logging(settings.app.debug_mode)

    audit_logger = AuditLogger()
    if storage is None:
        storage = JsonFileLedgerStorage.from_settings(
            settings.storage,
            audit_logger=audit_logger,
        )

    chat = settings.chat
    return BudgetLedger(
        storage=storage,
        authorized_channel=chat.authorized_channel,
        currency_label=chat.currency_label,
        audit_logger=audit_logger,
    )

"""
Audit Logger

DESIGN DECISION: Every command the ledger acts on is logged.
This provides:
1. Traceability of who spent what, beyond the expense log itself
2. Debugging capability when a document could not be read or written
3. A quiet record of ignored messages

The audit logger never raises. A broken log handler must not stop an
expense from being registered.
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from travel_budget.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(debug_mode: bool = False) -> None:
    """Route structlog output through the stdlib root logger."""
    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if debug_mode else logging.INFO,
    )


class AuditLogger:
    """
    Central audit logging service.

    Writes every event as one JSON line through structlog.
    """

    def __init__(self, logger_name: str = "travel_budget.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the underlying handler failed.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity.value == "error":
                self._logger.error("audit_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("audit_event", **log_dict)
            elif event.severity.value == "debug":
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except (OSError, ValueError, TypeError):
            return False

        return True

    def log_command_received(
        self,
        intent: str,
        correlation_id: UUID,
    ) -> None:
        """Log a parsed command."""
        self.log(AuditEventBuilder.command_received(
            intent=intent,
            correlation_id=correlation_id,
        ))

    def log_command_ignored(
        self,
        reason: str,
        channel_id: str,
        correlation_id: UUID,
    ) -> None:
        """Log a message that produced no reply."""
        self.log(AuditEventBuilder.command_ignored(
            reason=reason,
            channel_id=channel_id,
            correlation_id=correlation_id,
        ))

    def log_query_answered(
        self,
        intent: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.query_answered(
            intent=intent,
            correlation_id=correlation_id,
        ))

    def log_expense_registered(
        self,
        kind: str,
        amount: float,
        remaining_after: float,
        balance_after: Optional[float],
        city: Optional[str] = None,
        day: Optional[int] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a registered expense."""
        self.log(AuditEventBuilder.expense_registered(
            kind=kind,
            amount=amount,
            remaining_after=remaining_after,
            balance_after=balance_after,
            city=city,
            day=day,
            correlation_id=correlation_id,
        ))

    def log_lookup_failed(
        self,
        error_type: str,
        message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an unknown city, day or city cap."""
        self.log(AuditEventBuilder.lookup_failed(
            error_type=error_type,
            message=message,
            correlation_id=correlation_id,
        ))

    def log_document_load_failed(
        self,
        document: str,
        path: str,
        error_message: str,
    ) -> None:
        """Log a missing or unreadable ledger document."""
        self.log(AuditEventBuilder.document_load_failed(
            document=document,
            path=path,
            error_message=error_message,
        ))

    def log_document_save_failed(
        self,
        document: str,
        path: str,
        error_message: str,
    ) -> None:
        """Log a ledger document that could not be written."""
        self.log(AuditEventBuilder.document_save_failed(
            document=document,
            path=path,
            error_message=error_message,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use one per incoming chat message.
    """
    return uuid4()

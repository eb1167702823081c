"""
Audit Models for Travel Budget

Every command the ledger acts on, and every document problem it works
around, produces an audit event. Events go to the structured log only;
the expense log document stays the single record of spend.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Commands
    COMMAND_RECEIVED = "command_received"
    COMMAND_IGNORED = "command_ignored"
    QUERY_ANSWERED = "query_answered"

    # Ledger mutations
    EXPENSE_REGISTERED = "expense_registered"
    LOOKUP_FAILED = "lookup_failed"

    # Persistence
    DOCUMENT_LOAD_FAILED = "document_load_failed"
    DOCUMENT_SAVE_FAILED = "document_save_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # All events of one chat message share a correlation id
    correlation_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_registered(entry, correlation_id)
    """

    @staticmethod
    def command_received(
        intent: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_RECEIVED,
            correlation_id=correlation_id,
            description=f"Command received: {intent}",
            details={"intent": intent},
        )

    @staticmethod
    def command_ignored(
        reason: str,
        channel_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_IGNORED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Message ignored: {reason}",
            details={"reason": reason, "channel_id": channel_id},
        )

    @staticmethod
    def query_answered(
        intent: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.QUERY_ANSWERED,
            correlation_id=correlation_id,
            description=f"Answered {intent}",
            details={"intent": intent},
        )

    @staticmethod
    def expense_registered(
        kind: str,
        amount: float,
        remaining_after: float,
        balance_after: Optional[float],
        city: Optional[str] = None,
        day: Optional[int] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        target = f"{city}, day {day}" if city is not None else "free pool"
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REGISTERED,
            correlation_id=correlation_id,
            description=f"Expense of {amount:.2f} registered against {target}",
            details={
                "kind": kind,
                "amount": amount,
                "city": city,
                "day": day,
                "remaining_after": remaining_after,
                "balance_after": balance_after,
            },
        )

    @staticmethod
    def lookup_failed(
        error_type: str,
        message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        # Not an error: the user asked for something the budget doesn't have.
        # The reply echoes user text of any length, so it stays out of the
        # length-limited description.
        return AuditEvent(
            event_type=AuditEventType.LOOKUP_FAILED,
            correlation_id=correlation_id,
            description=f"Lookup failed: {error_type}",
            details={"error_type": error_type, "message": message},
        )

    @staticmethod
    def document_load_failed(
        document: str,
        path: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DOCUMENT_LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            description=f"Could not load {document} document, using defaults",
            details={
                "document": document,
                "path": path,
                "error_message": error_message,
            },
        )

    @staticmethod
    def document_save_failed(
        document: str,
        path: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DOCUMENT_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Could not save {document} document",
            details={
                "document": document,
                "path": path,
                "error_message": error_message,
            },
        )

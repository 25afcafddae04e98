"""
Audit Models for Paycheck Budget

Every command the UI runs is recorded as an audit event.
This provides:
1. A trace of what changed the budget and when
2. Debugging information when a save fails
3. A record of rejected input and cancelled deletes

DESIGN DECISION: Audit events are written to the structured log only.
They are never part of the persisted budget.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Paychecks
    PAYCHECK_SET = "paycheck_set"

    # Entries
    RECURRING_PAYMENT_ADDED = "recurring_payment_added"
    ONE_TIME_PAYMENT_ADDED = "one_time_payment_added"
    NOTE_ADDED = "note_added"
    ENTRY_DELETED = "entry_deleted"

    # Two-phase delete
    DELETE_REQUESTED = "delete_requested"
    DELETE_CANCELLED = "delete_cancelled"

    # Input
    MUTATION_REJECTED = "mutation_rejected"

    # Periods
    PERIOD_CHANGED = "period_changed"

    # Persistence
    BUDGET_LOADED = "budget_loaded"
    SAVE_FAILED = "save_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every command creates at least one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = Field(default=AuditSeverity.INFO)

    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'recurring_payment', 'note')"
    )
    entity_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.paycheck_set("1st", "1000")
        event = AuditEventBuilder.save_failed("paycheck_set", "disk full")
    """

    @staticmethod
    def paycheck_set(period: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PAYCHECK_SET,
            entity_type="paycheck",
            description=f"Paycheck for the {period} set to {amount}",
            details={
                "period": period,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def entry_added(
        event_type: AuditEventType,
        entity_type: str,
        entity_id: UUID,
        details: dict,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=event_type,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"Added {entity_type.replace('_', ' ')}",
            details=details,
            is_user_action=True,
        )

    @staticmethod
    def delete_requested(entity_type: str, entity_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DELETE_REQUESTED,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"Delete requested for {entity_type.replace('_', ' ')}",
            is_user_action=True,
        )

    @staticmethod
    def delete_cancelled(entity_type: str, entity_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DELETE_CANCELLED,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"Delete cancelled for {entity_type.replace('_', ' ')}",
            is_user_action=True,
        )

    @staticmethod
    def entry_deleted(entity_type: str, entity_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_DELETED,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"Deleted {entity_type.replace('_', ' ')}",
            is_user_action=True,
        )

    @staticmethod
    def mutation_rejected(command: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MUTATION_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"{command} rejected with {len(issues)} issues",
            details={
                "command": command,
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def period_changed(previous: Optional[str], current: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERIOD_CHANGED,
            description=f"Pay period changed from {previous or 'none'} to {current}",
            details={
                "previous": previous,
                "current": current,
            },
        )

    @staticmethod
    def budget_loaded(
        recurring_count: int,
        one_time_count: int,
        note_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_LOADED,
            severity=AuditSeverity.DEBUG,
            description="Budget loaded from storage",
            details={
                "recurring_payments": recurring_count,
                "one_time_payments": one_time_count,
                "notes": note_count,
            },
        )

    @staticmethod
    def save_failed(command: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Storage failed during {command}",
            error_message=error_message,
            details={
                "command": command,
            },
        )

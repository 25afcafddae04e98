"""
Audit Logger

DESIGN DECISION: Every command the UI runs is logged.
This provides:
1. Traceability of every change to the budget
2. Debugging capability when a save fails
3. A record of rejected input and cancelled deletes

The audit logger:
- Is synchronous, like the rest of the app
- Is local-only; events never go into the budget file
- Writes structured JSON lines through structlog
"""

import logging
from typing import Optional
from uuid import UUID

import structlog

from paycheck_budget.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
)


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


def configure_logging(log_level: str = "INFO") -> None:
    """Route structlog output to stderr at ``log_level``."""
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper(), logging.INFO),
    )


class AuditLogger:
    """Central audit logging service."""

    def __init__(self):
        self._logger = structlog.get_logger("paycheck_budget.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at a level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_paycheck_set(self, period: str, amount: str) -> None:
        self.log(AuditEventBuilder.paycheck_set(period=period, amount=amount))

    def log_entry_added(
        self,
        event_type: AuditEventType,
        entity_type: str,
        entity_id: UUID,
        details: dict,
    ) -> None:
        """Log a new recurring payment, one-time payment or note."""
        self.log(AuditEventBuilder.entry_added(
            event_type=event_type,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details,
        ))

    def log_delete_requested(self, entity_type: str, entity_id: UUID) -> None:
        self.log(AuditEventBuilder.delete_requested(entity_type, entity_id))

    def log_delete_cancelled(self, entity_type: str, entity_id: UUID) -> None:
        self.log(AuditEventBuilder.delete_cancelled(entity_type, entity_id))

    def log_entry_deleted(self, entity_type: str, entity_id: UUID) -> None:
        self.log(AuditEventBuilder.entry_deleted(entity_type, entity_id))

    def log_mutation_rejected(self, command: str, issues: list[dict]) -> None:
        """Log input that failed validation."""
        self.log(AuditEventBuilder.mutation_rejected(command=command, issues=issues))

    def log_period_changed(self, previous: Optional[str], current: str) -> None:
        self.log(AuditEventBuilder.period_changed(previous=previous, current=current))

    def log_budget_loaded(
        self,
        recurring_count: int,
        one_time_count: int,
        note_count: int,
    ) -> None:
        self.log(AuditEventBuilder.budget_loaded(
            recurring_count=recurring_count,
            one_time_count=one_time_count,
            note_count=note_count,
        ))

    def log_save_failed(self, command: str, error_message: str) -> None:
        """Log a mutation that could not be persisted."""
        self.log(AuditEventBuilder.save_failed(command=command, error_message=error_message))

"""
Data Models Package

This package contains all Pydantic models used in Paycheck Budget.
All data flowing through the system must conform to these schemas.
"""

from paycheck_budget.models.budget import (
    BudgetState,
    Entry,
    EntryKind,
    Note,
    OneTimePayment,
    PaycheckTarget,
    Paychecks,
    PayPeriod,
    RecurringPayment,
)
from paycheck_budget.models.results import (
    BudgetSnapshot,
    CommandResult,
    MutationResult,
    PendingDeletion,
    PeriodTotals,
    PeriodTransition,
    ValidationIssue,
)
from paycheck_budget.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Budget models
    "BudgetState",
    "Entry",
    "EntryKind",
    "Note",
    "OneTimePayment",
    "PaycheckTarget",
    "Paychecks",
    "PayPeriod",
    "RecurringPayment",
    # Results
    "BudgetSnapshot",
    "CommandResult",
    "MutationResult",
    "PendingDeletion",
    "PeriodTotals",
    "PeriodTransition",
    "ValidationIssue",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

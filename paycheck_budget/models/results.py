"""
Result Models for Paycheck Budget

Non-exceptional outcomes are returned as data, not raised:
- A rejected form submission is a MutationResult with issues
- A period's totals are a PeriodTotals
- A command run by the UI returns a CommandResult

DESIGN DECISION: Only storage failures raise. Everything the user can
fix by editing the form comes back as a result the UI can show.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from paycheck_budget.models.budget import (
    EntryKind,
    OneTimePayment,
    PayPeriod,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# VALIDATION
# =============================================================================

class ValidationIssue(BaseModel):
    """A single reason a mutation was rejected."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'not_positive', 'not_found')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
    )


class MutationResult(BaseModel):
    """
    Outcome of a Ledger Store mutation.

    applied=False means nothing changed in memory or in storage.
    """

    applied: bool
    entry_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entry created or removed"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)

    @classmethod
    def rejected(cls, *issues: ValidationIssue) -> "MutationResult":
        return cls(applied=False, issues=list(issues))

    @property
    def summary(self) -> str:
        """One-line explanation of why the mutation was rejected."""
        return "; ".join(issue.message for issue in self.issues)


# =============================================================================
# TOTALS
# =============================================================================

class PeriodTotals(BaseModel):
    """
    Income and deductions for one paycheck.

    ``available`` is clamped at zero for display. ``balance`` keeps the
    raw value so callers can detect overspending.
    """
    model_config = ConfigDict(frozen=True)

    period: PayPeriod
    income: Decimal
    recurring: Decimal
    one_time: Decimal
    available: Decimal = Field(ge=0)
    balance: Decimal

    @property
    def is_overspent(self) -> bool:
        return self.balance < 0


class PeriodTransition(BaseModel):
    """What the transition detector saw."""
    model_config = ConfigDict(frozen=True)

    previous: Optional[PayPeriod]
    current: PayPeriod

    @property
    def changed(self) -> bool:
        return self.previous is not self.current


# =============================================================================
# COMMANDS
# =============================================================================

class PendingDeletion(BaseModel):
    """
    First phase of a delete: what will be removed once the user agrees.

    Nothing is removed until confirm_deletion() receives this object.
    """
    model_config = ConfigDict(frozen=True)

    request_id: UUID = Field(default_factory=uuid4)
    kind: EntryKind
    entry_id: UUID
    label: str = Field(
        ...,
        description="Short description of the entry (name or note text)"
    )
    prompt: str = Field(
        ...,
        description="Confirmation question to show the user"
    )
    requested_at: datetime = Field(default_factory=utcnow)


class CommandResult(BaseModel):
    """Outcome of a command handler, ready for the UI to display."""

    success: bool
    message: str
    entry_id: Optional[UUID] = None
    issues: list[ValidationIssue] = Field(default_factory=list)


class BudgetSnapshot(BaseModel):
    """Everything the page needs to render once."""
    model_config = ConfigDict(frozen=True)

    today: date
    current_period: PayPeriod
    transition: PeriodTransition
    paycheck_dates: dict[PayPeriod, date]
    totals: dict[PayPeriod, PeriodTotals]
    current_one_time_payments: list[OneTimePayment] = Field(
        default_factory=list,
        description="One-time payments stamped with the current period"
    )

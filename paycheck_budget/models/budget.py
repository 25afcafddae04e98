"""
Core Data Models for Paycheck Budget

These models define the persisted budget aggregate and its entries.
They are designed to:
1. Enforce type safety at runtime
2. Round-trip through the persisted JSON layout unchanged
3. Accept snapshots written by older versions of the app

DESIGN DECISION: The field names in Python are snake_case, but the
persisted layout keeps the camelCase keys (recurringPayments, lastPayPeriod,
...) through aliases. Always dump with by_alias=True when persisting.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class PayPeriod(str, Enum):
    """
    The two half-month pay periods.

    A period is named after the paycheck that funds it.
    """
    FIRST = "1st"
    FIFTEENTH = "15th"


class PaycheckTarget(str, Enum):
    """Which paycheck(s) a recurring payment is charged against."""
    FIRST = "1st"
    FIFTEENTH = "15th"
    BOTH = "both"

    def applies_to(self, period: PayPeriod) -> bool:
        """Check if a payment with this target is charged in ``period``."""
        return self is PaycheckTarget.BOTH or self.value == PayPeriod(period).value


class EntryKind(str, Enum):
    """The three entry lists held by the budget."""
    RECURRING_PAYMENT = "recurring_payment"
    ONE_TIME_PAYMENT = "one_time_payment"
    NOTE = "note"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


# =============================================================================
# PAYCHECKS
# =============================================================================

class Paychecks(BaseModel):
    """
    Paycheck amount per period.

    Both periods are always present; a period that was never set is 0.
    Persisted as {"1st": ..., "15th": ...}.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    first: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        alias="1st",
        description="Amount of the paycheck received on the 1st"
    )
    fifteenth: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        alias="15th",
        description="Amount of the paycheck received on the 15th"
    )

    @field_validator("first", "fifteenth", mode="before")
    @classmethod
    def default_missing_amount(cls, v: Any) -> Any:
        """Older snapshots may hold null for a never-set paycheck."""
        return Decimal("0") if v is None else v

    def amount_for(self, period: PayPeriod) -> Decimal:
        """Get the paycheck amount for a period."""
        if PayPeriod(period) == PayPeriod.FIRST:
            return self.first
        return self.fifteenth

    def set_amount(self, period: PayPeriod, amount: Decimal) -> None:
        """Set the paycheck amount for a period (no validation)."""
        if PayPeriod(period) == PayPeriod.FIRST:
            self.first = amount
        else:
            self.fifteenth = amount


# =============================================================================
# ENTRIES
# =============================================================================

class RecurringPayment(BaseModel):
    """
    A payment charged every period matching its paycheck target.

    It has no period stamp: it is not tied to one period's data.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Stable entry identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="What the payment is for"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount charged each matching period"
    )
    paycheck: PaycheckTarget


class OneTimePayment(BaseModel):
    """
    A payment charged against one specific occurrence of a period.

    ``period`` is stamped at creation and never changes; the model is
    frozen so it cannot be reassigned.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Stable entry identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="What the payment is for"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount charged once"
    )
    paycheck: PayPeriod
    period: PayPeriod = Field(
        ...,
        description="Pay period that was current when the payment was added"
    )


class Note(BaseModel):
    """A freeform dated note. Never part of any total."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Stable entry identifier"
    )
    text: str = Field(
        ...,
        min_length=1
    )
    date: datetime = Field(
        ...,
        description="When the note was written"
    )


Entry = Union[RecurringPayment, OneTimePayment, Note]


# =============================================================================
# AGGREGATE
# =============================================================================

class BudgetState(BaseModel):
    """
    The single persisted aggregate.

    CRITICAL: List order is display order. Nothing in the system
    re-sorts these lists.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    paychecks: Paychecks = Field(default_factory=Paychecks)
    recurring_payments: list[RecurringPayment] = Field(
        default_factory=list,
        alias="recurringPayments",
    )
    one_time_payments: list[OneTimePayment] = Field(
        default_factory=list,
        alias="oneTimePayments",
    )
    notes: list[Note] = Field(
        default_factory=list,
        description="Absent in snapshots written before notes existed"
    )
    last_pay_period: Optional[PayPeriod] = Field(
        default=None,
        alias="lastPayPeriod",
        description="Last period seen by the transition detector"
    )

    @field_validator("paychecks", mode="before")
    @classmethod
    def default_paychecks(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("recurring_payments", "one_time_payments", "notes", mode="before")
    @classmethod
    def default_missing_list(cls, v: Any) -> Any:
        """Treat a null list as empty (backward compatibility)."""
        return [] if v is None else v

    def entries(self, kind: EntryKind) -> list:
        """Get the live list holding entries of ``kind``."""
        if kind is EntryKind.RECURRING_PAYMENT:
            return self.recurring_payments
        if kind is EntryKind.ONE_TIME_PAYMENT:
            return self.one_time_payments
        return self.notes

    def one_time_payments_for(self, period: PayPeriod) -> list[OneTimePayment]:
        """One-time payments stamped with ``period``, in list order."""
        period = PayPeriod(period)
        return [p for p in self.one_time_payments if p.period == period]

    def to_snapshot(self) -> dict:
        """Convert to the JSON-ready persisted layout."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_snapshot(cls, snapshot: dict) -> "BudgetState":
        """Build a state from a persisted snapshot (old or new layout)."""
        return cls.model_validate(snapshot)

"""
Ledger Store

The Ledger Store is the only owner of the BudgetState. Everything that
changes the budget goes through one of its mutations, and every applied
mutation persists the WHOLE aggregate before returning.

GUARANTEES:
- Rejected input never changes memory or storage
- List order is never changed except by appending or removing
- If the change or the save fails, the in-memory state is rolled back to
  what was last persisted and the error propagates to the caller
"""

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Callable, Iterator, Optional
from uuid import UUID

import structlog
from pydantic import ValidationError

from paycheck_budget.models.budget import (
    BudgetState,
    Entry,
    EntryKind,
    Note,
    OneTimePayment,
    PayPeriod,
    RecurringPayment,
)
from paycheck_budget.models.results import MutationResult, ValidationIssue
from paycheck_budget.periods.resolver import current_period
from paycheck_budget.services.storage import (
    BudgetStorageInterface,
    CorruptSnapshotError,
    StorageError,
)
from paycheck_budget.validation import EntryValidator


logger = structlog.get_logger(__name__)


def local_now() -> datetime:
    """Current local time, time zone aware."""
    return datetime.now().astimezone()


class LedgerStore:
    """
    Owns the budget aggregate and its load/mutate/save lifecycle.

    Usage:
        store = LedgerStore(JsonFileStorage("budget.json"))
        store.load()
        store.add_recurring_payment("Rent", "900", "1st")
    """

    def __init__(
        self,
        storage: BudgetStorageInterface,
        clock: Optional[Callable[[], datetime]] = None,
        validator: Optional[EntryValidator] = None,
    ):
        """
        Initialize the store.

        Args:
            storage: Backend holding the persisted snapshot
            clock: Returns "now" in the user's local time. Used to stamp
                notes and to find the current pay period.
            validator: Input validator (default EntryValidator)
        """
        self._storage = storage
        self._clock = clock or local_now
        self._validator = validator or EntryValidator()
        self._state: Optional[BudgetState] = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def state(self) -> BudgetState:
        """The live aggregate. Loaded from storage on first access."""
        if self._state is None:
            self.load()
        return self._state

    def today(self) -> date:
        return self._clock().date()

    def current_period(self) -> PayPeriod:
        """The pay period the clock is in now."""
        return current_period(self.today())

    def load(self) -> BudgetState:
        """
        Load the budget from storage.

        Returns a fresh all-defaults state if nothing was saved yet.
        Snapshots missing ``notes`` load with an empty notes list.

        Raises:
            StorageError: If the backend cannot be read or holds garbage
        """
        snapshot = self._storage.load_snapshot()
        if snapshot is None:
            self._state = BudgetState()
        else:
            self._state = self._decode(snapshot)

        logger.debug(
            "budget_loaded",
            fresh=snapshot is None,
            recurring_payments=len(self._state.recurring_payments),
            one_time_payments=len(self._state.one_time_payments),
            notes=len(self._state.notes),
        )
        return self._state

    def save(self, state: Optional[BudgetState] = None) -> None:
        """
        Persist the full aggregate.

        Args:
            state: Replace the owned state with this one before saving.
                Defaults to the current state.

        Raises:
            StorageError: If the backend cannot be written
        """
        if state is not None:
            self._state = state
        self._storage.save_snapshot(self.state.to_snapshot())

    @staticmethod
    def _decode(snapshot: dict) -> BudgetState:
        try:
            return BudgetState.from_snapshot(snapshot)
        except ValidationError as e:
            raise CorruptSnapshotError(f"Persisted budget is invalid: {e}")

    @contextmanager
    def _mutation(self, action: str) -> Iterator[BudgetState]:
        """Apply a change and persist it; roll back memory if either step fails."""
        state = self.state
        before = state.model_copy(deep=True)
        try:
            yield state
            self.save()
        except StorageError:
            self._state = before
            logger.error("budget_save_failed", action=action)
            raise
        except Exception:
            self._state = before
            logger.error("budget_mutation_failed", action=action)
            raise

    # -------------------------------------------------------------------------
    # Paychecks
    # -------------------------------------------------------------------------

    def set_paycheck_amount(self, period: Any, amount: Any) -> MutationResult:
        """Store the paycheck amount for a period. Only amounts > 0 are kept."""
        period_value, issues = self._validator.check_period(period)
        parsed, amount_issues = self._validator.check_amount(amount)
        issues += amount_issues
        if issues:
            return MutationResult.rejected(*issues)

        with self._mutation("set_paycheck_amount") as state:
            state.paychecks.set_amount(period_value, parsed)
        return MutationResult(applied=True)

    # -------------------------------------------------------------------------
    # Entries
    # -------------------------------------------------------------------------

    def add_recurring_payment(self, name: Any, amount: Any, paycheck: Any) -> MutationResult:
        """Append a payment charged every matching period."""
        clean_name, issues = self._validator.check_text(name, "name")
        parsed, amount_issues = self._validator.check_amount(amount)
        target, target_issues = self._validator.check_target(paycheck)
        issues += amount_issues + target_issues
        if issues:
            return MutationResult.rejected(*issues)

        payment = RecurringPayment(name=clean_name, amount=parsed, paycheck=target)
        with self._mutation("add_recurring_payment") as state:
            state.recurring_payments.append(payment)
        return MutationResult(applied=True, entry_id=payment.id)

    def add_one_time_payment(self, name: Any, amount: Any, paycheck: Any) -> MutationResult:
        """Append a payment charged once, stamped with the current period."""
        clean_name, issues = self._validator.check_text(name, "name")
        parsed, amount_issues = self._validator.check_amount(amount)
        period_value, period_issues = self._validator.check_period(paycheck)
        issues += amount_issues + period_issues
        if issues:
            return MutationResult.rejected(*issues)

        payment = OneTimePayment(
            name=clean_name,
            amount=parsed,
            paycheck=period_value,
            period=self.current_period(),
        )
        with self._mutation("add_one_time_payment") as state:
            state.one_time_payments.append(payment)
        return MutationResult(applied=True, entry_id=payment.id)

    def add_note(self, text: Any) -> MutationResult:
        """Append a note stamped with the current time."""
        clean_text, issues = self._validator.check_text(text, "text")
        if issues:
            return MutationResult.rejected(*issues)

        note = Note(text=clean_text, date=self._clock())
        with self._mutation("add_note") as state:
            state.notes.append(note)
        return MutationResult(applied=True, entry_id=note.id)

    def delete_recurring_payment(self, index: int) -> MutationResult:
        return self._delete_at(EntryKind.RECURRING_PAYMENT, index)

    def delete_one_time_payment(self, index: int) -> MutationResult:
        """Remove by position in the FULL one-time list, not the filtered view."""
        return self._delete_at(EntryKind.ONE_TIME_PAYMENT, index)

    def delete_note(self, index: int) -> MutationResult:
        return self._delete_at(EntryKind.NOTE, index)

    def find_entry(self, kind: EntryKind, entry_id: UUID) -> Optional[tuple[int, Entry]]:
        """Find an entry by ID. Returns (position, entry) or None."""
        for index, entry in enumerate(self.state.entries(kind)):
            if entry.id == entry_id:
                return index, entry
        return None

    def delete_entry(self, kind: EntryKind, entry_id: UUID) -> MutationResult:
        """Remove an entry by its stable ID."""
        found = self.find_entry(kind, entry_id)
        if found is None:
            return MutationResult.rejected(ValidationIssue(
                field="id",
                issue_type="not_found",
                message=f"No {kind.label} with id {entry_id}",
            ))
        return self._delete_at(kind, found[0])

    def _delete_at(self, kind: EntryKind, index: int) -> MutationResult:
        entries = self.state.entries(kind)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(entries):
            return MutationResult.rejected(ValidationIssue(
                field="index",
                issue_type="not_found",
                message=f"No {kind.label} at position {index}",
            ))

        with self._mutation(f"delete_{kind.value}") as state:
            removed = state.entries(kind).pop(index)
        return MutationResult(applied=True, entry_id=removed.id)

    # -------------------------------------------------------------------------
    # Period marker
    # -------------------------------------------------------------------------

    def set_last_pay_period(self, period: PayPeriod) -> MutationResult:
        """Record the last period seen by the transition detector."""
        with self._mutation("set_last_pay_period") as state:
            state.last_pay_period = PayPeriod(period)
        return MutationResult(applied=True)

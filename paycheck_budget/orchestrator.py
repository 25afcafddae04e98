"""
Main Orchestrator for Paycheck Budget

This module ties the components together and defines the commands the
UI runs:
1. Refresh (today's date -> transition check -> totals for both cards)
2. Submit forms (paycheck amount, recurring/one-time payment, note)
3. Delete (request -> user confirms or cancels -> delete by ID)

DESIGN DECISION: Commands return a CommandResult instead of raising.
- Rejected input comes back with the validation issues
- A storage failure comes back as success=False with the error message
- Every command is audited

Deletes are TWO-PHASE. request_delete() only describes what would be
removed; nothing changes until confirm_deletion() is called with that
description. The core never blocks on a prompt.
"""

from datetime import date
from typing import Any, Optional
from uuid import UUID

from paycheck_budget.audit import AuditLogger, configure_logging
from paycheck_budget.config import Settings, get_settings
from paycheck_budget.ledger import LedgerStore, PeriodTransitionDetector
from paycheck_budget.models.audit import AuditEventType
from paycheck_budget.models.budget import EntryKind, Note, PayPeriod
from paycheck_budget.models.results import (
    BudgetSnapshot,
    CommandResult,
    MutationResult,
    PendingDeletion,
    PeriodTransition,
)
from paycheck_budget.periods import current_period, pay_period_dates
from paycheck_budget.queries import compute_all_totals
from paycheck_budget.services.storage import (
    BudgetStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    StorageError,
)


DELETE_PROMPTS = {
    EntryKind.RECURRING_PAYMENT: "Are you sure you want to delete this recurring payment?",
    EntryKind.ONE_TIME_PAYMENT: "Are you sure you want to delete this payment?",
    EntryKind.NOTE: "Are you sure you want to delete this note?",
}


class BudgetCommands:
    """
    Command handlers invoked by the presentation shell.

    Each handler runs to completion: validate, mutate, persist, audit.
    The shell re-renders from refresh() afterwards.
    """

    def __init__(
        self,
        store: LedgerStore,
        audit_logger: Optional[AuditLogger] = None,
        transition_detector: Optional[PeriodTransitionDetector] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger or AuditLogger()
        self._detector = transition_detector or PeriodTransitionDetector(store)
        self._detector.add_listener(self._on_transition)

    @property
    def store(self) -> LedgerStore:
        return self._store

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def load(self) -> CommandResult:
        """Load the budget from storage."""
        try:
            state = self._store.load()
        except StorageError as e:
            self._audit_logger.log_save_failed("load", str(e))
            return CommandResult(success=False, message=f"Could not load your budget: {e}")

        self._audit_logger.log_budget_loaded(
            recurring_count=len(state.recurring_payments),
            one_time_count=len(state.one_time_payments),
            note_count=len(state.notes),
        )
        return CommandResult(success=True, message="Budget loaded")

    def refresh(self, today: Optional[date] = None) -> BudgetSnapshot:
        """
        Build everything the page renders.

        Runs the transition check first so the stored marker follows
        the calendar.

        Raises:
            StorageError: If the transition marker could not be saved
        """
        today = today or self._store.today()
        period = current_period(today)
        transition = self._detector.check_transition(period)
        state = self._store.state

        return BudgetSnapshot(
            today=today,
            current_period=period,
            transition=transition,
            paycheck_dates=pay_period_dates(today),
            totals=compute_all_totals(state, period),
            current_one_time_payments=state.one_time_payments_for(period),
        )

    def _on_transition(self, transition: PeriodTransition) -> None:
        self._audit_logger.log_period_changed(
            previous=transition.previous.value if transition.previous else None,
            current=transition.current.value,
        )

    # -------------------------------------------------------------------------
    # Forms
    # -------------------------------------------------------------------------

    def handle_submit_paycheck(self, period: Any, amount: Any) -> CommandResult:
        """Set a paycheck amount from the paycheck form."""
        result = self._run("set_paycheck_amount", self._store.set_paycheck_amount, period, amount)
        if isinstance(result, CommandResult):
            return result

        period_value = PayPeriod(period)
        stored = self._store.state.paychecks.amount_for(period_value)
        self._audit_logger.log_paycheck_set(period=period_value.value, amount=str(stored))
        return CommandResult(success=True, message=f"Paycheck for the {period_value.value} updated")

    def handle_add_recurring_payment(self, name: Any, amount: Any, paycheck: Any) -> CommandResult:
        """Add a recurring payment from the recurring payment form."""
        result = self._run(
            "add_recurring_payment",
            self._store.add_recurring_payment,
            name,
            amount,
            paycheck,
        )
        if isinstance(result, CommandResult):
            return result

        _, payment = self._store.find_entry(EntryKind.RECURRING_PAYMENT, result.entry_id)
        self._audit_logger.log_entry_added(
            event_type=AuditEventType.RECURRING_PAYMENT_ADDED,
            entity_type=EntryKind.RECURRING_PAYMENT.value,
            entity_id=payment.id,
            details={
                "name": payment.name,
                "amount": str(payment.amount),
                "paycheck": payment.paycheck.value,
            },
        )
        return CommandResult(
            success=True,
            message=f"Added recurring payment '{payment.name}'",
            entry_id=payment.id,
        )

    def handle_add_one_time_payment(self, name: Any, amount: Any, paycheck: Any) -> CommandResult:
        """Add a one-time payment for the current period."""
        result = self._run(
            "add_one_time_payment",
            self._store.add_one_time_payment,
            name,
            amount,
            paycheck,
        )
        if isinstance(result, CommandResult):
            return result

        _, payment = self._store.find_entry(EntryKind.ONE_TIME_PAYMENT, result.entry_id)
        self._audit_logger.log_entry_added(
            event_type=AuditEventType.ONE_TIME_PAYMENT_ADDED,
            entity_type=EntryKind.ONE_TIME_PAYMENT.value,
            entity_id=payment.id,
            details={
                "name": payment.name,
                "amount": str(payment.amount),
                "paycheck": payment.paycheck.value,
                "period": payment.period.value,
            },
        )
        return CommandResult(
            success=True,
            message=f"Added one-time payment '{payment.name}'",
            entry_id=payment.id,
        )

    def handle_add_note(self, text: Any) -> CommandResult:
        """Add a note from the notes form."""
        result = self._run("add_note", self._store.add_note, text)
        if isinstance(result, CommandResult):
            return result

        self._audit_logger.log_entry_added(
            event_type=AuditEventType.NOTE_ADDED,
            entity_type=EntryKind.NOTE.value,
            entity_id=result.entry_id,
            details={},
        )
        return CommandResult(success=True, message="Note added", entry_id=result.entry_id)

    # -------------------------------------------------------------------------
    # Two-phase delete
    # -------------------------------------------------------------------------

    def request_delete(self, kind: EntryKind, entry_id: UUID) -> Optional[PendingDeletion]:
        """
        Phase one: describe the entry that would be deleted.

        Returns None if no such entry exists. Nothing is changed.
        """
        found = self._store.find_entry(kind, entry_id)
        if found is None:
            return None

        _, entry = found
        label = entry.text if isinstance(entry, Note) else entry.name
        self._audit_logger.log_delete_requested(kind.value, entry_id)
        return PendingDeletion(
            kind=kind,
            entry_id=entry_id,
            label=label,
            prompt=DELETE_PROMPTS[kind],
        )

    def confirm_deletion(self, pending: PendingDeletion) -> CommandResult:
        """Phase two: the user agreed, remove the entry by its ID."""
        result = self._run(
            f"delete_{pending.kind.value}",
            self._store.delete_entry,
            pending.kind,
            pending.entry_id,
        )
        if isinstance(result, CommandResult):
            return result

        self._audit_logger.log_entry_deleted(pending.kind.value, pending.entry_id)
        return CommandResult(
            success=True,
            message=f"Deleted {pending.kind.label} '{pending.label}'",
            entry_id=pending.entry_id,
        )

    def cancel_deletion(self, pending: PendingDeletion) -> CommandResult:
        """The user declined; nothing is deleted."""
        self._audit_logger.log_delete_cancelled(pending.kind.value, pending.entry_id)
        return CommandResult(success=True, message="Delete cancelled", entry_id=pending.entry_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _run(self, command: str, mutation, *args) -> Any:
        """
        Run a store mutation.

        Returns the MutationResult if it was applied, otherwise a failed
        CommandResult ready to hand back to the UI.
        """
        try:
            result: MutationResult = mutation(*args)
        except StorageError as e:
            self._audit_logger.log_save_failed(command, str(e))
            return CommandResult(
                success=False,
                message=f"Your change could not be saved: {e}",
            )

        if not result.applied:
            self._audit_logger.log_mutation_rejected(
                command,
                [issue.model_dump() for issue in result.issues],
            )
            return CommandResult(
                success=False,
                message=result.summary,
                issues=result.issues,
            )

        return result


def create_storage(settings: Optional[Settings] = None) -> BudgetStorageInterface:
    """Build the storage backend named in the settings."""
    settings = settings or get_settings()
    storage_settings = settings.storage
    if storage_settings.backend == "memory":
        return InMemoryStorage()
    return JsonFileStorage(storage_settings.data_path)


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[BudgetStorageInterface] = None,
) -> BudgetCommands:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use (default get_settings())
        storage: Backend to use instead of the configured one

    Returns:
        BudgetCommands wired to a store. The budget is not loaded yet;
        call load() first.
    """
    settings = settings or get_settings()
    configure_logging(settings.app.log_level)

    store = LedgerStore(storage or create_storage(settings))
    return BudgetCommands(store=store, audit_logger=AuditLogger())

"""
Period Transition Detection

Compares the last pay period the app saw with the current one and
moves the stored marker when they differ (including the very first run).

DESIGN DECISION: Recurring payments are NOT snapshotted or carried over
at a transition; the totals calculator recomputes them on demand.
Listeners registered here are the hook for future period-boundary
actions such as carry-over or resets.
"""

from typing import Callable

from paycheck_budget.ledger.store import LedgerStore
from paycheck_budget.models.budget import PayPeriod
from paycheck_budget.models.results import PeriodTransition


TransitionListener = Callable[[PeriodTransition], None]


class PeriodTransitionDetector:
    """Detects when the calendar has moved into a different pay period."""

    def __init__(self, store: LedgerStore):
        self._store = store
        self._listeners: list[TransitionListener] = []

    def add_listener(self, listener: TransitionListener) -> None:
        """Call ``listener`` after each persisted transition."""
        self._listeners.append(listener)

    def check_transition(self, current_period: PayPeriod) -> PeriodTransition:
        """
        Update the stored marker if the period changed.

        Raises:
            StorageError: If the new marker could not be persisted
        """
        transition = PeriodTransition(
            previous=self._store.state.last_pay_period,
            current=current_period,
        )
        if transition.changed:
            self._store.set_last_pay_period(current_period)
            for listener in self._listeners:
                listener(transition)
        return transition

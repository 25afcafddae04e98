"""Ledger Store package."""

from paycheck_budget.ledger.store import LedgerStore, local_now
from paycheck_budget.ledger.transition import PeriodTransitionDetector

__all__ = ["LedgerStore", "PeriodTransitionDetector", "local_now"]

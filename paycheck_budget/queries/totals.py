"""
Totals Calculation

DESIGN DECISION: Totals are DERIVED, never stored.
Recurring payments are summed fresh on every call, and one-time
payments only count in the period they were stamped with. Nothing
is carried over between periods.

These functions have no side effects and return the same result for
the same state, so the UI can call them as often as it re-renders.
"""

from decimal import Decimal
from typing import Optional

from paycheck_budget.models.budget import BudgetState, PayPeriod
from paycheck_budget.models.results import PeriodTotals


ZERO = Decimal("0")


def compute_totals(
    state: BudgetState,
    period: PayPeriod,
    current_period: Optional[PayPeriod] = None,
) -> PeriodTotals:
    """
    Compute income, deductions and what is left for one paycheck.

    Args:
        state: The budget to read
        period: Which paycheck card to compute ("1st" or "15th")
        current_period: The period the calendar is in now. One-time
            payments only count when their stamped period matches it.
            Defaults to ``period``.

    Returns:
        PeriodTotals with ``available`` clamped at zero and the raw
        result in ``balance``
    """
    period = PayPeriod(period)
    current_period = period if current_period is None else PayPeriod(current_period)

    income = state.paychecks.amount_for(period)

    recurring = sum(
        (p.amount for p in state.recurring_payments if p.paycheck.applies_to(period)),
        ZERO,
    )

    one_time = sum(
        (
            p.amount
            for p in state.one_time_payments
            if p.paycheck == period and p.period == current_period
        ),
        ZERO,
    )

    balance = income - recurring - one_time

    return PeriodTotals(
        period=period,
        income=income,
        recurring=recurring,
        one_time=one_time,
        available=max(ZERO, balance),
        balance=balance,
    )


def compute_all_totals(
    state: BudgetState,
    current_period: PayPeriod,
) -> dict[PayPeriod, PeriodTotals]:
    """Totals for both paycheck cards, as of ``current_period``."""
    current_period = PayPeriod(current_period)
    return {
        period: compute_totals(state, period, current_period)
        for period in PayPeriod
    }

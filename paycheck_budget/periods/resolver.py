"""
Pay period resolution.

A month has two pay periods. Days 1 to 14 belong to the paycheck
received on the 1st; day 15 to the end of the month belongs to the
paycheck received on the 15th.

These functions only look at the date they are given. Callers decide
what "today" is (and in which time zone).
"""

from datetime import date

from paycheck_budget.models.budget import PayPeriod


SECOND_PAYDAY = 15


def current_period(day: date) -> PayPeriod:
    """Map a calendar date to its pay period."""
    if day.day < SECOND_PAYDAY:
        return PayPeriod.FIRST
    return PayPeriod.FIFTEENTH


def pay_period_dates(day: date) -> dict[PayPeriod, date]:
    """Paycheck dates of the month containing ``day``."""
    return {
        PayPeriod.FIRST: day.replace(day=1),
        PayPeriod.FIFTEENTH: day.replace(day=SECOND_PAYDAY),
    }

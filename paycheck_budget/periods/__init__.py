"""Pay period resolution package."""

from paycheck_budget.periods.resolver import current_period, pay_period_dates

__all__ = ["current_period", "pay_period_dates"]

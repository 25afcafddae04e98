"""Totals calculation package."""

from paycheck_budget.queries.totals import compute_all_totals, compute_totals

__all__ = ["compute_all_totals", "compute_totals"]

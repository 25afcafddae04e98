"""Input validation package."""

from paycheck_budget.validation.validator import MAX_AMOUNT, EntryValidator, parse_amount

__all__ = ["MAX_AMOUNT", "EntryValidator", "parse_amount"]

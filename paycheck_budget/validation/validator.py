"""
Mutation Input Validation

DESIGN DECISION: Form input is checked BEFORE any model is built or
any state is touched. A rejected submission leaves the budget and the
storage exactly as they were.

Checks:
- Names and note text must be non-empty after trimming
- Amounts must parse as finite decimals, be strictly positive and
  stay below MAX_AMOUNT
- Paycheck/period choices must be one of the known values

IMPORTANT: Validation never fixes input. It reports what is wrong
and the caller decides what to show.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from paycheck_budget.models.budget import PaycheckTarget, PayPeriod
from paycheck_budget.models.results import ValidationIssue


MAX_AMOUNT = Decimal("1000000000")


def parse_amount(raw: Any) -> Optional[Decimal]:
    """
    Parse a form amount into a Decimal.

    Accepts Decimal, int, float or a numeric string. Floats go through
    str() so 0.1 becomes Decimal("0.1"). Returns None for anything that
    is not a finite number.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        value = raw
    else:
        text = str(raw).strip().replace(",", "")
        if not text:
            return None
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    if not value.is_finite():
        return None
    return value


class EntryValidator:
    """Validates the arguments of Ledger Store mutations."""

    def check_amount(self, raw: Any, field: str = "amount") -> tuple[Optional[Decimal], list[ValidationIssue]]:
        """Parse an amount and require 0 < amount < MAX_AMOUNT."""
        amount = parse_amount(raw)
        if amount is None:
            return None, [ValidationIssue(
                field=field,
                issue_type="invalid_format",
                message=f"Amount must be a number, got {raw!r}",
            )]
        if amount <= 0:
            return None, [ValidationIssue(
                field=field,
                issue_type="not_positive",
                message="Amount must be greater than zero",
            )]
        if amount >= MAX_AMOUNT:
            return None, [ValidationIssue(
                field=field,
                issue_type="too_large",
                message=f"Amount must be less than {MAX_AMOUNT:,}",
            )]
        return amount, []

    def check_text(self, raw: Any, field: str) -> tuple[Optional[str], list[ValidationIssue]]:
        """Trim text and require it to be non-empty."""
        text = raw.strip() if isinstance(raw, str) else ""
        if not text:
            return None, [ValidationIssue(
                field=field,
                issue_type="missing",
                message=f"{field.capitalize()} is required",
            )]
        return text, []

    def check_period(self, raw: Any, field: str = "paycheck") -> tuple[Optional[PayPeriod], list[ValidationIssue]]:
        """Require one of the two pay periods."""
        try:
            return PayPeriod(raw), []
        except ValueError:
            return None, [ValidationIssue(
                field=field,
                issue_type="invalid_value",
                message=f"Paycheck must be one of {[p.value for p in PayPeriod]}, got {raw!r}",
            )]

    def check_target(self, raw: Any, field: str = "paycheck") -> tuple[Optional[PaycheckTarget], list[ValidationIssue]]:
        """Require one of the two pay periods or 'both'."""
        try:
            return PaycheckTarget(raw), []
        except ValueError:
            return None, [ValidationIssue(
                field=field,
                issue_type="invalid_value",
                message=f"Paycheck must be one of {[t.value for t in PaycheckTarget]}, got {raw!r}",
            )]

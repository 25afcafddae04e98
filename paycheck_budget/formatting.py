"""Formatting helpers for amounts and dates shown in the UI.

Display only. Persisted amounts and dates are never formatted.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Union


CENT = Decimal("0.01")

DEFAULT_DATE_FORMAT = "%b {day}, %Y"


def format_currency(
    amount: Union[Decimal, int, float],
    symbol: str = "$",
    negative: bool = False,
) -> str:
    """Format an amount with thousands separators and two decimals.

    Args:
        amount: The amount to format
        symbol: Currency symbol placed before the digits
        negative: Show the amount as a deduction (leading minus)

    Example:
        >>> format_currency(Decimal("1234.5"))
        '$1,234.50'
        >>> format_currency(Decimal("200"), negative=True)
        '-$200.00'
    """
    value = Decimal(str(amount))
    with localcontext() as ctx:
        # quantize needs every integer digit plus two decimals
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        value = value.quantize(CENT, rounding=ROUND_HALF_UP)
        if negative:
            value = -value
        sign = "-" if value < 0 else ""
        return f"{sign}{symbol}{abs(value):,.2f}"


def format_date(value: Union[date, datetime], fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """Format a date for display, e.g. 'Oct 3, 2026'.

    ``fmt`` is a strftime format. A ``{day}`` placeholder is replaced
    with the day of the month without zero padding.
    """
    return value.strftime(fmt).replace("{day}", str(value.day))

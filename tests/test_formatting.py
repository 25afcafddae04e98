"""Tests for display formatting."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from paycheck_budget.formatting import format_currency, format_date


class TestFormatCurrency:
    """Tests for format_currency()."""

    @pytest.mark.parametrize("amount,expected", [
        (Decimal("1234.5"), "$1,234.50"),
        (Decimal("0"), "$0.00"),
        (Decimal("1000000"), "$1,000,000.00"),
        (Decimal("2.005"), "$2.01"),
        (15, "$15.00"),
    ])
    def test_formats_amounts(self, amount, expected):
        """Test thousands separators and two decimals."""
        assert format_currency(amount) == expected

    def test_deduction(self):
        """Test deductions get a leading minus before the symbol."""
        assert format_currency(Decimal("200"), negative=True) == "-$200.00"

    def test_negative_balance(self):
        """Test a negative balance is shown with a minus sign."""
        assert format_currency(Decimal("-50")) == "-$50.00"

    def test_very_large_amount(self):
        """Test amounts beyond the default decimal precision still format."""
        assert format_currency(Decimal("1e30")) == "$1,000,000,000,000,000,000,000,000,000,000.00"

    def test_custom_symbol(self):
        """Test the currency symbol can be changed."""
        assert format_currency(Decimal("9.9"), symbol="€") == "€9.90"


class TestFormatDate:
    """Tests for format_date()."""

    def test_default_format_unpadded_day(self):
        """Test the default shows the day without a leading zero."""
        assert format_date(date(2026, 10, 3)) == "Oct 3, 2026"
        assert format_date(date(2026, 10, 18)) == "Oct 18, 2026"

    def test_datetime_and_custom_format(self):
        """Test datetimes format the same way as dates."""
        value = datetime(2026, 10, 15, 8, 0, tzinfo=timezone.utc)
        assert format_date(value, "%Y-%m-%d") == "2026-10-15"

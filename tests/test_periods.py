"""Tests for pay period resolution."""

import calendar
from datetime import date

import pytest

from paycheck_budget.models.budget import PayPeriod
from paycheck_budget.periods import current_period, pay_period_dates


class TestCurrentPeriod:
    """Tests for current_period()."""

    @pytest.mark.parametrize("day", range(1, 15))
    def test_first_half_of_month(self, day):
        """Test days 1 through 14 belong to the 1st paycheck."""
        assert current_period(date(2026, 10, day)) is PayPeriod.FIRST

    @pytest.mark.parametrize("day", range(15, 32))
    def test_second_half_of_month(self, day):
        """Test day 15 through the end of a 31-day month belong to the 15th."""
        assert current_period(date(2026, 10, day)) is PayPeriod.FIFTEENTH

    @pytest.mark.parametrize("year,month", [(2026, 2), (2028, 2), (2026, 4), (2026, 12)])
    def test_last_day_of_month(self, year, month):
        """Test the last day of short and leap months maps to the 15th."""
        last_day = calendar.monthrange(year, month)[1]
        assert current_period(date(year, month, last_day)) is PayPeriod.FIFTEENTH

    def test_boundary(self):
        """Test the switch happens exactly between the 14th and the 15th."""
        assert current_period(date(2026, 1, 14)) is PayPeriod.FIRST
        assert current_period(date(2026, 1, 15)) is PayPeriod.FIFTEENTH


class TestPayPeriodDates:
    """Tests for pay_period_dates()."""

    def test_dates_in_same_month(self):
        """Test paycheck dates are the 1st and 15th of the given month."""
        dates = pay_period_dates(date(2026, 10, 18))
        assert dates == {
            PayPeriod.FIRST: date(2026, 10, 1),
            PayPeriod.FIFTEENTH: date(2026, 10, 15),
        }

    def test_february(self):
        """Test short months still have both paycheck dates."""
        dates = pay_period_dates(date(2026, 2, 28))
        assert dates[PayPeriod.FIRST] == date(2026, 2, 1)
        assert dates[PayPeriod.FIFTEENTH] == date(2026, 2, 15)

"""Tests for date, month and amount parsing."""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from yardroute.utils import parse_amount, parse_date, parse_month


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()


def test_parse_relative_to_reference():
    """Relative dates are computed from the reference date."""
    today = date(2024, 2, 29)
    assert parse_date("Tomorrow", today=today) == date(2024, 3, 1)
    assert parse_date(" yesterday ", today=today) == date(2024, 2, 28)


def test_parse_tomorrow():
    """Test parsing 'tomorrow'."""
    assert parse_date("tomorrow") == date.today() + timedelta(days=1)


def test_parse_invalid_date():
    """Test parsing invalid date raises ValueError."""
    with pytest.raises(ValueError):
        parse_date("not a date")


class TestParseMonth:
    """Billing month parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [("2024-01", (1, 2024)), ("2024-1", (1, 2024)), ("03/2023", (3, 2023)), ("12/2023", (12, 2023))],
    )
    def test_explicit_months(self, value, expected):
        assert parse_month(value) == expected

    def test_relative_months(self):
        today = date(2024, 1, 20)
        assert parse_month("this month", today=today) == (1, 2024)
        assert parse_month("last month", today=today) == (12, 2023)

    @pytest.mark.parametrize("value", ["2024-13", "0/2024", "January", "2024"])
    def test_invalid_months(self, value):
        with pytest.raises(ValueError):
            parse_month(value)


class TestParseAmount:
    """Price parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [("25", "25.00"), ("$25.5", "25.50"), ("1,250.505", "1250.51"), (" 0 ", "0.00")],
    )
    def test_valid_amounts(self, value, expected):
        assert parse_amount(value) == Decimal(expected)

    @pytest.mark.parametrize("value", ["", "abc", "-5", "NaN"])
    def test_invalid_amounts(self, value):
        with pytest.raises(ValueError):
            parse_amount(value)

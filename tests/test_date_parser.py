"""Tests for date parsing."""

import pytest
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta

from cashplan.utils.date_parser import format_ledger_date, parse_date, parse_ledger_date

TODAY = date(2023, 10, 1)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_slashed_dates_are_day_first():
    assert parse_date("05/10/2023") == date(2023, 10, 5)


def test_parse_relative_dates():
    """Test parsing relative dates against a fixed day."""
    assert parse_date("today", today=TODAY) == TODAY
    assert parse_date("Yesterday", today=TODAY) == TODAY - timedelta(days=1)
    assert parse_date("tomorrow", today=TODAY) == TODAY + timedelta(days=1)
    assert parse_date("next week", today=TODAY) == TODAY + timedelta(weeks=1)
    assert parse_date("next month", today=TODAY) == TODAY + relativedelta(months=1)


def test_parse_days_from_today():
    assert parse_date("+30", today=TODAY) == date(2023, 10, 31)


def test_parse_today_defaults_to_system_date():
    assert parse_date("today") == date.today()


def test_parse_invalid():
    """Test that invalid dates raise ValueError."""
    with pytest.raises(ValueError):
        parse_date("not a date")


def test_parse_ledger_date():
    assert parse_ledger_date("05/10/2023", TODAY) == date(2023, 10, 5)
    assert parse_ledger_date("5/1/2024", TODAY) == date(2024, 1, 5)


@pytest.mark.parametrize("value", [None, "", "   ", "2023-10-05", "05/10"])
def test_parse_ledger_date_falls_back(value):
    assert parse_ledger_date(value, TODAY) == TODAY


@pytest.mark.parametrize("value", ["31/02/2023", "aa/bb/cccc", "00/10/2023"])
def test_parse_ledger_date_invalid(value):
    with pytest.raises(ValueError):
        parse_ledger_date(value, TODAY)


def test_format_ledger_date():
    assert format_ledger_date(date(2023, 1, 5)) == "05/01/2023"

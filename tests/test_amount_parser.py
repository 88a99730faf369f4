"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from cashplan.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("123.45", Decimal("123.45")),
        ("1,234.56", Decimal("1234.56")),
        ("$5000", Decimal("5000")),
        ("€1,200", Decimal("1200")),
        ("E£20,000", Decimal("20000")),
        ("1,200 EUR", Decimal("1200")),
        ("(150.00)", Decimal("-150.00")),
        (" 7 ", Decimal("7")),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", "1.2.3", "nan", "inf"])
def test_parse_amount_invalid(raw):
    with pytest.raises(ValueError):
        parse_amount(raw)

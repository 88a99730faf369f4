"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

LEDGER_DATE_FORMAT = "%d/%m/%Y"


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", "15/01/2024" (day first)
    - Relative dates: "today", "yesterday", "tomorrow", "next week",
      "next month", "+5" (days from today)

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates, defaults to the system date

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "next week": today + timedelta(weeks=1),
        "next month": today + relativedelta(months=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    # "+N" means N days from today
    if date_str.startswith("+") and date_str[1:].isdigit():
        return today + timedelta(days=int(date_str[1:]))

    # ISO dates are year first; anything else with slashes is day first
    try:
        dt = date_parser.parse(date_str, dayfirst="/" in date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_ledger_date(date_str: Optional[str], default: date) -> date:
    """Parse a ``DD/MM/YYYY`` field from a ledger file.

    An empty field, or one that does not have three ``/``-separated parts,
    falls back to ``default``.

    Raises:
        ValueError: If the field has the right shape but is not a real date
    """
    if not date_str or not date_str.strip():
        return default
    parts = date_str.strip().split("/")
    if len(parts) != 3:
        return default
    day, month, year = parts
    try:
        return date(int(year), int(month), int(day))
    except ValueError as e:
        raise ValueError(f"Invalid date '{date_str.strip()}': {e}")


def format_ledger_date(value: date) -> str:
    """Render a date as ``DD/MM/YYYY``."""
    return value.strftime(LEDGER_DATE_FORMAT)

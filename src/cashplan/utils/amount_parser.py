"""Amount parsing for ledger files and CLI options."""

import re
from decimal import Decimal, InvalidOperation

# Symbols and ISO codes of the tradable accounts, as they appear in exported sheets
_CURRENCY_MARKS = re.compile(r"E£|[$€£]|\b(?:EGP|USD|EUR)\b", re.IGNORECASE)


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into an exact Decimal.

    Accepted forms:
    - "20000" or "1,234.56" (thousands separators are dropped)
    - "$5000", "E£20,000", "1,200 EUR"
    - "(150.00)" for a negative amount

    Raises:
        ValueError: If nothing numeric remains once marks are removed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()
    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]
    text = _CURRENCY_MARKS.sub("", text).replace(",", "").strip()

    try:
        amount = Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'")
    return -amount if negative else amount

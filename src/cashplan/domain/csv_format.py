"""Fixed eight-column ledger file format.

Columns, in order and without a header on import:
Original Date (DD/MM/YYYY), Partner, Invoice No., Payable/Receivable, Amount,
Currency, Payment Type, Adjusted Date (DD/MM/YYYY).
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Optional

from cashplan.domain.entities import Currency, Transaction, TransactionType
from cashplan.domain.errors import ParseError
from cashplan.utils.amount_parser import parse_amount
from cashplan.utils.date_parser import format_ledger_date, parse_ledger_date

COLUMN_COUNT = 8
EXPORT_HEADERS = (
    "Original Date",
    "Partner",
    "Invoice No.",
    "Payable/Receivable",
    "Amount",
    "Currency",
    "Payment Type",
    "Adjusted Date",
)


@dataclass(frozen=True)
class ParsedRow:
    """A ledger line before it is given an id and stored."""

    original_date: date
    partner: str
    invoice_no: str
    type: TransactionType
    amount: Decimal
    currency: Currency
    payment_type: str
    adjusted_date: date


def parse_line(line: str, today: date, line_number: Optional[int] = None) -> Optional[ParsedRow]:
    """Parse one ledger line.

    Args:
        line: Raw text line
        today: Fallback for missing or unshaped dates
        line_number: Reported in error messages

    Returns:
        The parsed row, or None if the line has fewer than eight fields

    Raises:
        ParseError: If the amount, currency or a date is invalid
    """
    columns = [c.strip() for c in line.split(",")]
    if len(columns) < COLUMN_COUNT:
        return None

    original, partner, invoice_no, kind, amount_str, currency_str, payment, adjusted = columns[
        :COLUMN_COUNT
    ]
    try:
        amount = parse_amount(amount_str)
        currency = Currency.parse(currency_str)
        original_date = parse_ledger_date(original, today)
        adjusted_date = parse_ledger_date(adjusted, today)
    except ValueError as e:
        raise ParseError(str(e), line_number) from e
    if amount < 0:
        raise ParseError(f"Amount must not be negative (got {amount})", line_number)

    txn_type = TransactionType.PAYABLE if "payable" in kind.lower() else TransactionType.RECEIVABLE
    return ParsedRow(
        original_date=original_date,
        partner=partner,
        invoice_no=invoice_no,
        type=txn_type,
        amount=amount,
        currency=currency,
        payment_type=payment,
        adjusted_date=adjusted_date,
    )


def export_transactions(transactions: Iterable[Transaction]) -> str:
    """Render transactions in the import layout with a header row.

    Dates are written as ``DD/MM/YYYY`` and the partner is quoted.
    """
    lines = [",".join(EXPORT_HEADERS)]
    for txn in transactions:
        lines.append(
            ",".join(
                [
                    format_ledger_date(txn.original_date),
                    f'"{txn.partner}"',
                    txn.invoice_no,
                    txn.type.value,
                    str(txn.amount),
                    txn.currency.value,
                    txn.payment_type,
                    format_ledger_date(txn.adjusted_date),
                ]
            )
        )
    return "\n".join(lines)


def write_export(path: str | Path, transactions: Iterable[Transaction]) -> Path:
    """Write the export to ``path`` and return it."""
    target = Path(path)
    target.write_text(export_transactions(transactions) + "\n", encoding="utf-8")
    return target

"""Tests for the eight-column ledger line format."""

from datetime import date
from decimal import Decimal

import pytest

from cashplan.domain.csv_format import EXPORT_HEADERS, export_transactions, parse_line, write_export
from cashplan.domain.entities import Currency, Transaction, TransactionType
from cashplan.domain.errors import ParseError

TODAY = date(2023, 10, 1)


def test_parse_line_fields():
    row = parse_line(" 05/10/2023 , Beta Supply ,INV-002,Payable,20000,EGP,cheque,07/10/2023", TODAY)

    assert row.original_date == date(2023, 10, 5)
    assert row.adjusted_date == date(2023, 10, 7)
    assert row.partner == "Beta Supply"
    assert row.invoice_no == "INV-002"
    assert row.type == TransactionType.PAYABLE
    assert row.currency == Currency.EGP
    assert row.payment_type == "cheque"


def test_parse_line_short_line_is_dropped():
    assert parse_line("05/10/2023,Beta Supply,INV-002", TODAY) is None


@pytest.mark.parametrize(
    "kind,expected",
    [
        ("Payable", TransactionType.PAYABLE),
        ("accounts payable", TransactionType.PAYABLE),
        ("Receivable", TransactionType.RECEIVABLE),
        ("anything else", TransactionType.RECEIVABLE),
    ],
)
def test_parse_line_type_rule(kind, expected):
    row = parse_line(f"01/10/2023,X,1,{kind},10,USD,cash,01/10/2023", TODAY)
    assert row.type == expected


@pytest.mark.parametrize("raw", ["", "2023-10-05", "tbd"])
def test_parse_line_unshaped_dates_default_to_today(raw):
    row = parse_line(f"{raw},X,1,Payable,10,USD,cash,{raw}", TODAY)
    assert row.original_date == TODAY
    assert row.adjusted_date == TODAY


def test_parse_line_extra_columns_ignored():
    row = parse_line("01/10/2023,X,1,Payable,10,USD,cash,02/10/2023,note,more", TODAY)
    assert row.adjusted_date == date(2023, 10, 2)


@pytest.mark.parametrize(
    "line",
    [
        "01/10/2023,X,1,Payable,ten,USD,cash,01/10/2023",
        "01/10/2023,X,1,Payable,10,GBP,cash,01/10/2023",
        "32/10/2023,X,1,Payable,10,USD,cash,01/10/2023",
        "01/10/2023,X,1,Payable,-10,USD,cash,01/10/2023",
    ],
)
def test_parse_line_invalid_values(line):
    with pytest.raises(ParseError) as excinfo:
        parse_line(line, TODAY, line_number=7)
    assert excinfo.value.line_number == 7
    assert str(excinfo.value).startswith("Line 7: ")


def test_parse_line_virtual_accounts():
    row = parse_line("01/10/2023,Bank,1,Receivable,10,Bank Debt,transfer,01/10/2023", TODAY)
    assert row.currency == Currency.BANK_DEBT


def _sample_transaction():
    return Transaction(
        id="abc",
        original_date=date(2023, 10, 5),
        adjusted_date=date(2023, 10, 20),
        partner="Beta Supply",
        invoice_no="INV-002",
        type=TransactionType.PAYABLE,
        amount=Decimal("20000.50"),
        currency=Currency.EGP,
        payment_type="cheque",
    )


def test_export_layout():
    lines = export_transactions([_sample_transaction()]).splitlines()

    assert lines[0] == ",".join(EXPORT_HEADERS)
    assert lines[0] == (
        "Original Date,Partner,Invoice No.,Payable/Receivable,Amount,Currency,Payment Type,Adjusted Date"
    )
    assert lines[1] == '05/10/2023,"Beta Supply",INV-002,Payable,20000.50,EGP,cheque,20/10/2023'


def test_export_then_import_keeps_dates(import_service, session, tmp_path):
    path = write_export(tmp_path / "out.csv", [_sample_transaction()])
    # The header has eight fields but no valid amount, so it is reported and skipped
    text = path.read_text(encoding="utf-8").replace('"', "")

    result = import_service.import_text(text)

    assert result["imported"] == 1
    assert len(result["errors"]) == 1
    txn = session.db.list_transactions()[0]
    assert txn.original_date == date(2023, 10, 5)
    assert txn.adjusted_date == date(2023, 10, 20)
    assert txn.amount == Decimal("20000.50")

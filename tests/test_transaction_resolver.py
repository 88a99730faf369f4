"""Tests for resolving transaction references."""

from decimal import Decimal

import pytest

from cashplan.domain.errors import NotFoundError, ValidationError
from cashplan.utils.transaction_resolver import resolve_transaction


def test_resolve_by_id(sample_ledger, transaction_service):
    txn = transaction_service.list_transactions()[0]
    assert resolve_transaction(transaction_service, f" {txn.id} ") == txn.id


def test_resolve_by_invoice(sample_ledger, transaction_service):
    txn = next(t for t in transaction_service.list_transactions() if t.invoice_no == "INV-003")
    assert resolve_transaction(transaction_service, "INV-003") == txn.id


def test_resolve_ambiguous_invoice(sample_ledger, transaction_service):
    transaction_service.create_transaction(
        partner="Copy", type="Payable", amount=Decimal("1"), currency="USD", invoice_no="INV-003"
    )
    with pytest.raises(ValidationError) as excinfo:
        resolve_transaction(transaction_service, "INV-003")
    assert "matches 2 transactions" in str(excinfo.value)


def test_resolve_missing(sample_ledger, transaction_service):
    with pytest.raises(NotFoundError):
        resolve_transaction(transaction_service, "INV-999")

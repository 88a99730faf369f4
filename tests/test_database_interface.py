"""Tests for the Database interface returning domain models."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from cashplan.database.factories import create_memory_database
from cashplan.domain import entities
from cashplan.domain.entities import Currency, TransactionType
from cashplan.domain.errors import ConflictError, ValidationError


def _txn(id, day=date(2023, 10, 1), amount="10.10", currency=Currency.USD):
    return entities.Transaction(
        id=id,
        original_date=day,
        adjusted_date=day,
        partner="Partner",
        invoice_no=f"INV-{id}",
        type=TransactionType.PAYABLE,
        amount=Decimal(amount),
        currency=currency,
        payment_type="cash",
    )


@pytest.fixture
def db():
    database = create_memory_database()
    database.connect()
    yield database
    database.disconnect()


class TestDatabaseInterface:
    """Tests to verify the store returns domain models and keeps its invariants."""

    def test_get_transaction_returns_domain_model(self, db):
        db.add_transaction(_txn("a"))

        txn = db.get_transaction("a")

        assert isinstance(txn, entities.Transaction)
        assert txn.type == TransactionType.PAYABLE
        assert txn.currency == Currency.USD
        assert txn.amount == Decimal("10.10")
        assert isinstance(txn.amount, Decimal)
        assert isinstance(txn.original_date, date)

    def test_amounts_keep_full_precision(self, db):
        db.add_transaction(_txn("a", amount="0.1000000000000000055511151231257827"))
        assert db.get_transaction("a").amount == Decimal("0.1000000000000000055511151231257827")

    def test_list_orders_by_adjusted_date_then_insertion(self, db):
        db.add_transaction(_txn("late", day=date(2023, 10, 9)))
        db.add_transaction(_txn("first", day=date(2023, 10, 2)))
        db.add_transaction(_txn("second", day=date(2023, 10, 2)))

        assert [t.id for t in db.list_transactions()] == ["first", "second", "late"]

    def test_list_filters(self, db):
        db.add_transaction(_txn("usd", day=date(2023, 10, 2)))
        db.add_transaction(_txn("egp", day=date(2023, 10, 2), currency=Currency.EGP))
        db.add_transaction(_txn("later", day=date(2023, 10, 20), currency=Currency.EGP))

        assert [t.id for t in db.list_transactions(currency=Currency.EGP)] == ["egp", "later"]
        assert [t.id for t in db.list_transactions(on_date=date(2023, 10, 2))] == ["usd", "egp"]
        assert [t.id for t in db.list_transactions(start_date=date(2023, 10, 3))] == ["later"]
        assert [t.id for t in db.list_transactions(end_date=date(2023, 10, 3))] == ["usd", "egp"]

    def test_add_rejects_invalid_records(self, db):
        with pytest.raises(ValidationError):
            db.add_transaction(_txn("neg", amount="-1"))
        with pytest.raises(ValidationError):
            db.add_transaction(replace(_txn("bad"), currency="GBP"))
        db.add_transaction(_txn("a"))
        with pytest.raises(ConflictError):
            db.add_transaction(_txn("a"))
        assert [t.id for t in db.list_transactions()] == ["a"]

    def test_update_transaction(self, db):
        db.add_transaction(_txn("a"))

        updated = db.update_transaction("a", adjusted_date=date(2023, 10, 15), is_locked=True)

        assert updated.adjusted_date == date(2023, 10, 15)
        assert updated.is_locked
        assert db.get_transaction("a") == updated

    def test_update_unknown_id_is_noop(self, db):
        assert db.update_transaction("missing", is_locked=True) is None

    def test_update_rejects_unknown_fields_and_bad_values(self, db):
        db.add_transaction(_txn("a"))
        with pytest.raises(ValidationError):
            db.update_transaction("a", id="b")
        with pytest.raises(ValidationError):
            db.update_transaction("a", amount=Decimal("-5"))
        assert db.get_transaction("a") == _txn("a")

    def test_delete_transaction(self, db):
        db.add_transaction(_txn("a"))
        assert db.delete_transaction("a").id == "a"
        assert db.delete_transaction("a") is None
        assert db.list_transactions() == []

    def test_replace_all_is_atomic(self, db):
        db.add_transaction(_txn("keep"))

        with pytest.raises(ConflictError):
            db.replace_all([_txn("x"), _txn("x")])
        with pytest.raises(ValidationError):
            db.replace_all([_txn("y"), _txn("z", amount="-1")])

        assert [t.id for t in db.list_transactions()] == ["keep"]

        db.replace_all([_txn("y", day=date(2023, 10, 5)), _txn("z", day=date(2023, 10, 5))])
        assert [t.id for t in db.list_transactions()] == ["y", "z"]

    def test_opening_balances_default_to_zero(self, db):
        balances = db.get_opening_balances()
        assert set(balances) == set(Currency)
        assert all(amount == 0 for amount in balances.values())

    def test_set_opening_balances_merges(self, db):
        db.set_opening_balances({Currency.USD: Decimal("100"), "EGP": Decimal("5")})
        db.set_opening_balances({Currency.USD: Decimal("250.75")})

        balances = db.get_opening_balances()
        assert balances[Currency.USD] == Decimal("250.75")
        assert balances[Currency.EGP] == Decimal("5")

    def test_stores_are_isolated(self, db):
        other = create_memory_database()
        other.connect()
        try:
            db.add_transaction(_txn("a"))
            assert other.list_transactions() == []
        finally:
            other.disconnect()

"""Tests for the planning session, its clock and audit trail."""

from datetime import date, datetime, time

import pytest

from cashplan.domain.clock import FixedClock, SystemClock
from cashplan.domain.entities import Currency
from cashplan.domain.session import PlanningSession


def test_fixed_clock():
    clock = FixedClock(date(2023, 10, 1), at=time(14, 30))

    assert clock.today() == date(2023, 10, 1)
    assert clock.now() == datetime(2023, 10, 1, 14, 30)

    clock.set_today(date(2023, 10, 2))
    assert clock.now() == datetime(2023, 10, 2, 14, 30)


def test_system_clock_today():
    assert SystemClock().today() == date.today()


def test_audit_log_appends_in_order(session, clock):
    first = session.audit.append("first")
    clock.set_today(date(2023, 10, 2))
    second = session.audit.append("second")

    assert [e.message for e in session.audit.entries()] == ["first", "second"]
    assert first.id != second.id
    assert session.audit.render() == (
        "[2023-10-01 09:00:00] first\n[2023-10-02 09:00:00] second"
    )


def test_audit_entries_are_a_snapshot(session):
    session.audit.append("one")
    entries = session.audit.entries()
    session.audit.append("two")

    assert len(entries) == 1
    assert len(session.audit) == 2


def test_sessions_do_not_share_state(session, transaction_service):
    other = PlanningSession.in_memory()
    try:
        transaction_service.create_transaction(
            partner="Only here", type="Receivable", amount=1, currency=Currency.EUR
        )
        assert other.db.list_transactions() == []
        assert len(other.audit) == 0
    finally:
        other.close()


def test_new_ids_are_unique(session):
    ids = {session.new_id() for _ in range(200)}
    assert len(ids) == 200


@pytest.mark.parametrize("value", ["EGP", "egp", "Bank Debt", "bank_debt", "SHACCOUNT", Currency.USD])
def test_currency_parse(value):
    assert isinstance(Currency.parse(value), Currency)


def test_currency_parse_unknown():
    with pytest.raises(ValueError):
        Currency.parse("GBP")

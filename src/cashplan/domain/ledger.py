"""Day-by-day cash position projection."""

from collections import defaultdict
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from cashplan.config import DEFAULT_HORIZON_DAYS
from cashplan.domain.entities import Currency, LedgerRow, Transaction, TransactionType
from cashplan.domain.session import PlanningSession

ZERO = Decimal("0")


def project(
    transactions: Iterable[Transaction],
    opening_balances: Mapping[Currency, Decimal],
    currency: Currency | str,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    start_date: Optional[date | datetime] = None,
) -> list[LedgerRow]:
    """Project daily credits, debits and running balance for one currency.

    Produces ``horizon_days + 1`` rows starting at ``start_date`` (today when
    omitted). Only transactions whose adjusted date falls exactly on a row's
    day contribute to it; anything outside the window is ignored.

    Args:
        transactions: Transactions to project
        opening_balances: Opening balance per account; missing accounts are zero
        currency: Account to project
        horizon_days: Number of days after ``start_date`` to cover
        start_date: First day of the projection; time of day is ignored

    Returns:
        A new list of LedgerRow, one per day
    """
    currency = Currency.parse(currency)
    if start_date is None:
        start_date = date.today()
    elif isinstance(start_date, datetime):
        start_date = start_date.date()

    credits: dict[date, Decimal] = defaultdict(lambda: ZERO)
    debits: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for txn in transactions:
        if txn.currency != currency:
            continue
        if txn.type == TransactionType.RECEIVABLE:
            credits[txn.adjusted_date] += txn.amount
        else:
            debits[txn.adjusted_date] += txn.amount

    rows: list[LedgerRow] = []
    balance = Decimal(opening_balances.get(currency, ZERO))
    for offset in range(horizon_days + 1):
        day = start_date + timedelta(days=offset)
        credit = credits.get(day, ZERO)
        debit = debits.get(day, ZERO)
        net = credit - debit
        balance += net
        rows.append(LedgerRow(date=day, credit=credit, debit=debit, net=net, balance=balance))
    return rows


def weekly_snapshots(rows: Sequence[LedgerRow]) -> list[LedgerRow]:
    """Every seventh row, starting with the first."""
    return list(rows[::7])


def lowest_balance(rows: Sequence[LedgerRow]) -> Optional[LedgerRow]:
    """Row with the minimum running balance; the earliest one wins ties."""
    if not rows:
        return None
    return min(rows, key=lambda row: row.balance)


class LedgerService:
    """Projects the session's current transaction set."""

    def __init__(self, session: PlanningSession):
        self.session = session
        self.db = session.db

    def project(
        self,
        currency: Currency | str,
        horizon_days: int = DEFAULT_HORIZON_DAYS,
        start_date: Optional[date] = None,
    ) -> list[LedgerRow]:
        """Project ``currency`` from today (or ``start_date``) over the horizon."""
        return project(
            self.db.list_transactions(currency=Currency.parse(currency)),
            self.db.get_opening_balances(),
            currency,
            horizon_days=horizon_days,
            start_date=start_date or self.session.clock.today(),
        )

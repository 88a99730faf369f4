"""Generic SQLAlchemy store implementation."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from cashplan.database.base import (
    PATCHABLE_FIELDS,
    Database,
    validate_batch,
    validate_transaction,
)
from cashplan.database.mappers import transaction_to_domain, transaction_to_orm
from cashplan.database.models import (
    OpeningBalance,
    Transaction,
    create_session_factory,
)
from cashplan.domain.entities import (
    Currency,
    Transaction as DomainTransaction,
    zero_balances,
)
from cashplan.domain.errors import (
    ConflictError,
    ValidationError,
    duplicate_transaction_id,
)
from cashplan.logging_config import get_logger

logger = get_logger("database")


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of the Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite://' for an
                in-memory store)
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def _next_position(self, session: Session) -> int:
        current = session.query(func.max(Transaction.position)).scalar()
        return 0 if current is None else current + 1

    # Transaction operations
    def add_transaction(self, txn: DomainTransaction) -> str:
        """Insert a transaction. Returns its id."""
        validate_transaction(txn)
        session = self._get_session()
        if session.get(Transaction, txn.id) is not None:
            raise ConflictError(duplicate_transaction_id(txn.id))
        session.add(transaction_to_orm(txn, self._next_position(session)))
        session.commit()
        return txn.id

    def get_transaction(self, transaction_id: str) -> Optional[DomainTransaction]:
        """Get transaction by id."""
        session = self._get_session()
        txn = session.get(Transaction, transaction_id)
        if txn is None:
            return None
        return transaction_to_domain(txn)

    def list_transactions(
        self,
        currency: Optional[Currency] = None,
        on_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[DomainTransaction]:
        """List transactions with optional filters."""
        session = self._get_session()
        query = session.query(Transaction)

        if currency is not None:
            query = query.filter(Transaction.currency == Currency(currency).value)
        if on_date is not None:
            query = query.filter(Transaction.adjusted_date == on_date)
        if start_date is not None:
            query = query.filter(Transaction.adjusted_date >= start_date)
        if end_date is not None:
            query = query.filter(Transaction.adjusted_date <= end_date)

        transactions = query.order_by(Transaction.adjusted_date, Transaction.position).all()
        return [transaction_to_domain(txn) for txn in transactions]

    def update_transaction(self, transaction_id: str, **patch: Any) -> Optional[DomainTransaction]:
        """Merge ``patch`` into a transaction; unknown ids are ignored."""
        unknown = set(patch) - PATCHABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        session = self._get_session()
        row = session.get(Transaction, transaction_id)
        if row is None:
            logger.debug("update skipped, transaction absent", extra={"transaction_id": transaction_id})
            return None

        updated = replace(transaction_to_domain(row), **patch)
        validate_transaction(updated)

        patched = transaction_to_orm(updated, row.position)
        for name in patch:
            setattr(row, name, getattr(patched, name))
        session.commit()
        return updated

    def delete_transaction(self, transaction_id: str) -> Optional[DomainTransaction]:
        """Delete a transaction; unknown ids are ignored."""
        session = self._get_session()
        row = session.get(Transaction, transaction_id)
        if row is None:
            logger.debug("delete skipped, transaction absent", extra={"transaction_id": transaction_id})
            return None
        removed = transaction_to_domain(row)
        session.delete(row)
        session.commit()
        return removed

    def replace_all(self, transactions: Iterable[DomainTransaction]) -> None:
        """Atomically replace the whole transaction set."""
        batch = validate_batch(transactions)
        session = self._get_session()
        try:
            session.query(Transaction).delete()
            session.add_all(
                transaction_to_orm(txn, position) for position, txn in enumerate(batch)
            )
            session.commit()
        except Exception:
            session.rollback()
            raise
        logger.debug("transaction set replaced", extra={"count": len(batch)})

    # Opening balance operations
    def get_opening_balances(self) -> dict[Currency, Decimal]:
        """Get opening balances for every account."""
        session = self._get_session()
        balances = zero_balances()
        for row in session.query(OpeningBalance).all():
            balances[Currency(row.currency)] = row.amount
        return balances

    def set_opening_balances(self, balances: Mapping[Currency, Decimal]) -> None:
        """Set opening balances for the given accounts."""
        session = self._get_session()
        for currency, amount in balances.items():
            key = Currency.parse(currency).value
            row = session.get(OpeningBalance, key)
            if row is None:
                session.add(OpeningBalance(currency=key, amount=Decimal(amount)))
            else:
                row.amount = Decimal(amount)
        session.commit()

"""Mapper functions to convert between domain entities and SQLAlchemy models."""

from cashplan.domain import entities as domain
from cashplan.database.models import Transaction as ORMTransaction


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        original_date=orm_transaction.original_date,
        adjusted_date=orm_transaction.adjusted_date,
        partner=orm_transaction.partner,
        invoice_no=orm_transaction.invoice_no,
        type=domain.TransactionType(orm_transaction.type),
        amount=orm_transaction.amount,
        currency=domain.Currency(orm_transaction.currency),
        payment_type=orm_transaction.payment_type,
        is_locked=orm_transaction.is_locked,
    )


def transaction_to_orm(txn: domain.Transaction, position: int) -> ORMTransaction:
    """Convert domain Transaction entity to a new SQLAlchemy model."""
    return ORMTransaction(
        id=txn.id,
        position=position,
        original_date=txn.original_date,
        adjusted_date=txn.adjusted_date,
        partner=txn.partner,
        invoice_no=txn.invoice_no,
        type=txn.type.value,
        amount=txn.amount,
        currency=txn.currency.value,
        payment_type=txn.payment_type,
        is_locked=txn.is_locked,
    )

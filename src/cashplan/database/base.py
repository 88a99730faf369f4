"""Abstract transaction store interface."""

from abc import ABC, abstractmethod
from dataclasses import fields
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from cashplan.domain.entities import Currency, Transaction, TransactionType
from cashplan.domain.errors import (
    ConflictError,
    ValidationError,
    duplicate_transaction_id,
    negative_amount,
    unknown_currency,
    unknown_transaction_type,
)

PATCHABLE_FIELDS = frozenset(f.name for f in fields(Transaction)) - {"id"}


def validate_transaction(txn: Transaction) -> None:
    """Check the invariants every stored transaction must satisfy.

    Raises:
        ValidationError: If the amount is negative or the type or currency is
            outside the supported sets
    """
    if not isinstance(txn.type, TransactionType):
        raise ValidationError(unknown_transaction_type(txn.type))
    if not isinstance(txn.currency, Currency):
        raise ValidationError(unknown_currency(txn.currency))
    if not isinstance(txn.amount, Decimal):
        raise ValidationError(f"Amount must be a Decimal (got {type(txn.amount).__name__})")
    if txn.amount < 0:
        raise ValidationError(negative_amount(txn.amount))


def validate_batch(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Validate a full replacement set, including identifier uniqueness."""
    seen: set[str] = set()
    batch = list(transactions)
    for txn in batch:
        validate_transaction(txn)
        if txn.id in seen:
            raise ConflictError(duplicate_transaction_id(txn.id))
        seen.add(txn.id)
    return batch


class Database(ABC):
    """Abstract store for the session's transactions and opening balances.

    The store validates records but is otherwise permissive: updating or
    deleting an unknown id is a no-op, and lock policy is enforced by the
    domain services, not here.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    # Transaction operations
    @abstractmethod
    def add_transaction(self, txn: Transaction) -> str:
        """Insert a transaction. Returns its id.

        Raises:
            ValidationError: If the record breaks a store invariant
            ConflictError: If the id is already taken
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by id."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        currency: Optional[Currency] = None,
        on_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions ordered by adjusted date, then insertion order."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: str, **patch: Any) -> Optional[Transaction]:
        """Merge ``patch`` into a transaction.

        Returns:
            The updated transaction, or None if the id is unknown
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Delete a transaction.

        Returns:
            The removed transaction, or None if the id is unknown
        """
        pass

    @abstractmethod
    def replace_all(self, transactions: Iterable[Transaction]) -> None:
        """Atomically replace the whole transaction set.

        Either every record is stored or the previous set is left intact.
        """
        pass

    # Opening balance operations
    @abstractmethod
    def get_opening_balances(self) -> dict[Currency, Decimal]:
        """Get opening balances for every account (missing ones are zero)."""
        pass

    @abstractmethod
    def set_opening_balances(self, balances: Mapping[Currency, Decimal]) -> None:
        """Set opening balances; accounts not mentioned keep their value."""
        pass

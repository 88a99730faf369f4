"""Transaction domain service: the interactive mutation operations."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from cashplan.domain.entities import (
    Currency,
    PaymentType,
    SplitPart,
    Transaction as TransactionEntity,
    TransactionType,
)
from cashplan.domain.errors import ValidationError, split_total_mismatch
from cashplan.domain.session import PlanningSession
from cashplan.logging_config import get_logger

logger = get_logger("domain.transaction")

SPLIT_TOLERANCE = Decimal("0.01")
INTERNAL_TRANSFER_INVOICE = "INT-TRANSFER"


class TransactionService:
    """Service for managing the session's transactions.

    Operations that target a missing id return None (or an empty result)
    instead of raising; each successful operation appends one audit entry.
    """

    def __init__(self, session: PlanningSession):
        """Initialize transaction service.

        Args:
            session: Planning session holding the store, audit log and clock
        """
        self.session = session
        self.db = session.db
        self.audit = session.audit

    def create_transaction(
        self,
        partner: str,
        type: TransactionType | str,
        amount: Decimal,
        currency: Currency | str,
        invoice_no: str = "",
        payment_type: str = PaymentType.TRANSFER.value,
        original_date: Optional[date] = None,
        adjusted_date: Optional[date] = None,
    ) -> TransactionEntity:
        """Manually add an unlocked transaction.

        Args:
            partner: Counterparty name
            type: Payable or Receivable
            amount: Non-negative amount in ``currency``
            currency: Account the transaction is booked against
            invoice_no: Free-text reference
            payment_type: Payment method, informational only
            original_date: Contractual due date, defaults to today
            adjusted_date: Planned settlement date, defaults to today

        Returns:
            The created transaction

        Raises:
            ValidationError: If the type, currency or amount is invalid
        """
        try:
            txn_type = TransactionType.parse(type)
            txn_currency = Currency.parse(currency)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        today = self.session.clock.today()
        txn = TransactionEntity(
            id=self.session.new_id(),
            original_date=original_date or today,
            adjusted_date=adjusted_date or today,
            partner=partner,
            invoice_no=invoice_no,
            type=txn_type,
            amount=Decimal(amount),
            currency=txn_currency,
            payment_type=payment_type,
            is_locked=False,
        )
        self.db.add_transaction(txn)
        self.audit.append(
            f"Manually added transaction: {txn.partner}, {txn.amount} {txn.currency.value}"
        )
        return txn

    def get_transaction(self, transaction_id: str) -> Optional[TransactionEntity]:
        """Get transaction by id.

        Args:
            transaction_id: Transaction id

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        currency: Optional[Currency | str] = None,
        on_date: Optional[date] = None,
    ) -> list[TransactionEntity]:
        """List transactions, optionally narrowed to one ledger cell.

        Args:
            currency: Optional account filter
            on_date: Optional adjusted-date filter

        Returns:
            List of transaction entities
        """
        if currency is not None:
            currency = Currency.parse(currency)
        return self.db.list_transactions(currency=currency, on_date=on_date)

    def adjust_date(self, transaction_id: str, new_date: date) -> Optional[TransactionEntity]:
        """Move the planned settlement date of an unlocked transaction.

        Locked transactions are returned unchanged. No bounds are enforced:
        the new date may precede the original date.

        Returns:
            The resulting transaction, or None if the id is unknown
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            logger.debug("adjust_date ignored, transaction absent", extra={"transaction_id": transaction_id})
            return None
        if txn.is_locked:
            logger.info("adjust_date ignored, transaction locked", extra={"transaction_id": transaction_id})
            return txn
        if txn.adjusted_date == new_date:
            return txn

        updated = self.db.update_transaction(transaction_id, adjusted_date=new_date)
        diff = (new_date - txn.original_date).days
        self.audit.append(
            f'Changed payment date of "{txn.partner}" to {new_date.isoformat()} ({diff} days later).'
        )
        return updated

    def toggle_lock(self, transaction_id: str) -> Optional[TransactionEntity]:
        """Flip the lock flag. Returns None if the id is unknown."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            logger.debug("toggle_lock ignored, transaction absent", extra={"transaction_id": transaction_id})
            return None
        return self.db.update_transaction(transaction_id, is_locked=not txn.is_locked)

    def delete_transaction(self, transaction_id: str) -> Optional[TransactionEntity]:
        """Delete a transaction.

        Returns:
            The removed transaction, or None if the id is unknown
        """
        removed = self.db.delete_transaction(transaction_id)
        if removed is None:
            return None
        self.audit.append(
            f"Deleted transaction: {removed.partner} - {removed.amount} {removed.currency.value}"
        )
        return removed

    def split_transaction(
        self, transaction_id: str, parts: Sequence[SplitPart]
    ) -> list[TransactionEntity]:
        """Replace a transaction with one new transaction per part.

        Each part keeps the original's fields except amount, adjusted date,
        id and lock (always unlocked); invoice numbers get a ``-S{n}`` suffix.

        Args:
            transaction_id: Transaction to split
            parts: Amount and planned date of each slice

        Returns:
            The new transactions, or an empty list if the id is unknown

        Raises:
            ValidationError: If there are no parts, a part is negative, or the
                parts do not sum to the original amount within 0.01
        """
        original = self.db.get_transaction(transaction_id)
        if original is None:
            logger.debug("split ignored, transaction absent", extra={"transaction_id": transaction_id})
            return []
        if not parts:
            raise ValidationError("A split needs at least one part")
        if any(Decimal(part.amount) < 0 for part in parts):
            raise ValidationError("Split amounts must not be negative")

        allocated = sum((Decimal(part.amount) for part in parts), Decimal("0"))
        if abs(original.amount - allocated) >= SPLIT_TOLERANCE:
            raise ValidationError(split_total_mismatch(original.amount, allocated))

        pieces = [
            replace(
                original,
                id=self.session.new_id(),
                amount=Decimal(part.amount),
                adjusted_date=part.date,
                is_locked=False,
                invoice_no=f"{original.invoice_no}-S{index}",
            )
            for index, part in enumerate(parts, start=1)
        ]
        remaining = [txn for txn in self.db.list_transactions() if txn.id != original.id]
        self.db.replace_all(remaining + pieces)

        self.audit.append(
            f"Split transaction for {original.partner} ({original.amount} "
            f"{original.currency.value}) into {len(pieces)} parts."
        )
        return pieces

    def internal_transfer(
        self,
        credit_account: Currency | str,
        debit_account: Currency | str,
        amount: Decimal,
        rate: Decimal,
        on_date: date,
    ) -> tuple[TransactionEntity, TransactionEntity]:
        """Record a completed movement of funds between two accounts.

        Creates a locked Receivable of ``amount`` in ``credit_account`` and a
        locked Payable of ``amount * rate`` in ``debit_account``, where one
        unit of the credit currency equals ``rate`` units of the debit one.

        Returns:
            The (credit, debit) legs

        Raises:
            ValidationError: If an account is unknown or amount/rate is not positive
        """
        try:
            credit_currency = Currency.parse(credit_account)
            debit_currency = Currency.parse(debit_account)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        amount = Decimal(amount)
        rate = Decimal(rate)
        if amount <= 0:
            raise ValidationError("Transfer amount must be positive")
        if rate <= 0:
            raise ValidationError("Transfer rate must be positive")

        credit_leg = TransactionEntity(
            id=self.session.new_id(),
            original_date=on_date,
            adjusted_date=on_date,
            partner=debit_currency.value,
            invoice_no=INTERNAL_TRANSFER_INVOICE,
            type=TransactionType.RECEIVABLE,
            amount=amount,
            currency=credit_currency,
            payment_type=PaymentType.TRANSFER.value,
            is_locked=True,
        )
        debit_leg = replace(
            credit_leg,
            id=self.session.new_id(),
            partner=credit_currency.value,
            type=TransactionType.PAYABLE,
            amount=amount * rate,
            currency=debit_currency,
        )
        self.db.replace_all(self.db.list_transactions() + [credit_leg, debit_leg])

        self.audit.append(
            f"Internal Transfer: {amount} {credit_currency.value} to {debit_currency.value} "
            f"(Rate: {rate}). Created 2 transactions."
        )
        return credit_leg, debit_leg

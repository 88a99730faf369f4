"""Utility for resolving transaction references to ids."""

from cashplan.domain.errors import NotFoundError, ValidationError, transaction_not_found
from cashplan.domain.transaction import TransactionService


def resolve_transaction(transaction_service: TransactionService, reference: str) -> str:
    """Resolve a transaction id or invoice number to a transaction id.

    Args:
        transaction_service: TransactionService instance
        reference: Transaction id, or an invoice number carried by exactly
            one transaction

    Returns:
        Transaction id

    Raises:
        NotFoundError: If nothing matches
        ValidationError: If the invoice number is shared by several transactions
    """
    reference = reference.strip()
    if transaction_service.get_transaction(reference) is not None:
        return reference

    matches = [
        txn.id
        for txn in transaction_service.list_transactions()
        if txn.invoice_no == reference
    ]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise ValidationError(
            f"Invoice number '{reference}' matches {len(matches)} transactions; use the id instead"
        )
    raise NotFoundError(transaction_not_found(reference))

"""Shared domain error messages and error types."""

from datetime import date
from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested transaction does not exist.

    Mutation operations treat a missing target as a no-op, so this is only
    raised where a caller explicitly asks for a hard lookup (CLI references).
    """


class ConflictError(DomainError):
    """Domain conflict, such as identifier collisions."""


class ParseError(DomainError):
    """A single import line could not be parsed."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


class AdvisorError(DomainError):
    """The optimization advisor failed or returned an unusable response."""


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_transaction_id(transaction_id: str) -> str:
    """Return message for an identifier collision."""
    return f"Transaction with id '{transaction_id}' already exists"


def negative_amount(amount: Decimal) -> str:
    """Return message for a negative transaction amount."""
    return f"Amount must not be negative (got {amount})"


def unknown_currency(value: object) -> str:
    """Return message for a currency outside the supported set."""
    return f"Unknown currency '{value}'"


def unknown_transaction_type(value: object) -> str:
    """Return message for a type that is neither payable nor receivable."""
    return f"Unknown transaction type '{value}'"


def split_total_mismatch(expected: Decimal, allocated: Decimal) -> str:
    """Return message when split parts do not add up to the original amount."""
    return (
        f"Split parts total {allocated} but the transaction amount is {expected}; "
        f"remaining {expected - allocated}"
    )


def not_convertible(from_currency: object, to_currency: object) -> str:
    """Return message for a conversion involving a virtual account."""
    return f"Cannot convert between {from_currency} and {to_currency}"


def deferral_out_of_window(transaction_id: str, suggested: date, latest: date) -> str:
    """Return message for an adjustment beyond the allowed deferral window."""
    return (
        f"Suggested date {suggested.isoformat()} for transaction {transaction_id} "
        f"is after the latest allowed date {latest.isoformat()}"
    )

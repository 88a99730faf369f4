"""Domain model entities for cashplan.

These are pure data classes representing planning concepts, independent of
the database schema. Records are immutable; mutations produce new instances
through ``dataclasses.replace`` and are written back through the store.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class Currency(str, Enum):
    """Accounts a transaction can be booked against.

    ``BANK_DEBT`` and ``SH_ACCOUNT`` are virtual funding sources rather than
    tradable currencies and cannot be converted.
    """

    EGP = "EGP"
    USD = "USD"
    EUR = "EUR"
    BANK_DEBT = "Bank Debt"
    SH_ACCOUNT = "SH Account"

    @property
    def is_virtual(self) -> bool:
        return self in (Currency.BANK_DEBT, Currency.SH_ACCOUNT)

    @classmethod
    def parse(cls, value: "str | Currency") -> "Currency":
        """Resolve a currency from its value, member name or compact spelling.

        Raises:
            ValueError: If the value does not name a supported account
        """
        if isinstance(value, Currency):
            return value
        key = str(value).strip().replace(" ", "").replace("_", "").upper()
        for member in cls:
            if key in (
                member.value.replace(" ", "").upper(),
                member.name.replace("_", ""),
            ):
                return member
        raise ValueError(f"Unknown currency '{value}'")


class TransactionType(str, Enum):
    """Sign convention: payables reduce a balance, receivables increase it."""

    PAYABLE = "Payable"
    RECEIVABLE = "Receivable"

    @classmethod
    def parse(cls, value: "str | TransactionType") -> "TransactionType":
        if isinstance(value, TransactionType):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key == member.value.lower():
                return member
        raise ValueError(f"Unknown transaction type '{value}'")


class PaymentType(str, Enum):
    """Known payment methods. Free-text methods are stored as plain strings."""

    CHEQUE = "cheque"
    TRANSFER = "transfer"
    CASH = "cash"


class ProposalKind(str, Enum):
    """Kinds of new transactions an optimization plan may propose."""

    TRANSFER = "TRANSFER"
    INJECTION = "INJECTION"


@dataclass(frozen=True)
class Transaction:
    """A single planned payment or receipt."""

    id: str
    original_date: date
    adjusted_date: date
    partner: str
    invoice_no: str
    type: TransactionType
    amount: Decimal
    currency: Currency
    payment_type: str
    is_locked: bool = False

    @property
    def deferral_days(self) -> int:
        """Days between the contractual and the planned settlement date."""
        return (self.adjusted_date - self.original_date).days

    @property
    def signed_amount(self) -> Decimal:
        if self.type == TransactionType.PAYABLE:
            return -self.amount
        return self.amount


@dataclass(frozen=True)
class LedgerRow:
    """One day of aggregated cash movement for one currency."""

    date: date
    credit: Decimal
    debit: Decimal
    net: Decimal
    balance: Decimal


@dataclass(frozen=True)
class LogEntry:
    """Audit trail entry."""

    id: str
    timestamp: datetime
    message: str


@dataclass(frozen=True)
class ExchangeRates:
    """USD bridge rates: 1 EUR = ``eur_usd`` USD and 1 USD = ``usd_egp`` EGP."""

    eur_usd: Decimal
    usd_egp: Decimal


@dataclass(frozen=True)
class SplitPart:
    """One slice of a split request."""

    amount: Decimal
    date: date


@dataclass(frozen=True)
class PlanAdjustment:
    """A suggested new settlement date for an existing transaction."""

    transaction_id: str
    suggested_date: date
    reason: str = ""


@dataclass(frozen=True)
class PlanProposal:
    """A new transfer or injection proposed by the advisor.

    ``amount`` is denominated in ``currency``, which for transfers is the
    currency of ``source_account``.
    """

    kind: ProposalKind
    source_account: str
    target_account: str
    amount: Decimal
    currency: str
    date: date
    reason: str = ""


@dataclass(frozen=True)
class OptimizationPlan:
    """Advisor output awaiting confirmation."""

    adjustments: tuple[PlanAdjustment, ...] = ()
    new_transactions: tuple[PlanProposal, ...] = ()
    summary: str = ""
    skipped_entries: int = 0


@dataclass(frozen=True)
class ApplyResult:
    """Outcome of applying an optimization plan."""

    applied_adjustments: int = 0
    skipped_adjustments: int = 0
    applied_proposals: int = 0
    skipped_proposals: int = 0
    created: tuple[Transaction, ...] = field(default_factory=tuple)


AccountBalances = dict[Currency, Decimal]


def zero_balances() -> AccountBalances:
    """Opening balances with every account at zero."""
    return {currency: Decimal("0") for currency in Currency}


def transaction_snapshot(txn: Transaction) -> dict[str, Optional[object]]:
    """Reduced view of a transaction shared with the optimization advisor."""
    return {
        "id": txn.id,
        "date": txn.adjusted_date.isoformat(),
        "originalDate": txn.original_date.isoformat(),
        "type": txn.type.value,
        "amount": float(txn.amount),
        "currency": txn.currency.value,
        "partner": txn.partner,
        "isLocked": txn.is_locked,
    }

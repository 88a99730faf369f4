"""Optimization plans: requesting them from an advisor and applying them.

The advisor is untrusted for structure and trusted for meaning. Plans are
applied as given unless ``enforce_constraints`` is requested, in which case
deferrals that break the lock or deferral-window rules are skipped and the
skip is recorded in the audit trail.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import timedelta
from decimal import Decimal
from typing import Any, Optional, Sequence

from cashplan.config import DEFAULT_HORIZON_DAYS
from cashplan.domain.conversion import convert
from cashplan.domain.entities import (
    ApplyResult,
    Currency,
    ExchangeRates,
    LedgerRow,
    OptimizationPlan,
    PaymentType,
    PlanAdjustment,
    PlanProposal,
    ProposalKind,
    Transaction,
    TransactionType,
    transaction_snapshot,
)
from cashplan.domain.errors import (
    AdvisorError,
    DomainError,
    ValidationError,
    deferral_out_of_window,
)
from cashplan.domain.ledger import LedgerService, weekly_snapshots
from cashplan.domain.session import PlanningSession
from cashplan.logging_config import get_logger

logger = get_logger("domain.optimization")

TRANSFER_OUT_INVOICE = "AI-TRF-OUT"
TRANSFER_IN_INVOICE = "AI-TRF-IN"
INJECTION_INVOICE = "AI-INJECT"


@dataclass(frozen=True)
class AdvisorRequest:
    """Read-only snapshot handed to the advisor."""

    transactions: tuple[dict[str, Any], ...]
    opening_balances: dict[Currency, Decimal]
    max_deferral_days: int
    rates: ExchangeRates

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready form of the request."""
        return {
            "transactions": list(self.transactions),
            "openingBalances": {
                currency.value: float(amount) for currency, amount in self.opening_balances.items()
            },
            "maxDeferralDays": self.max_deferral_days,
            "rates": {
                "eurUsd": float(self.rates.eur_usd),
                "usdEgp": float(self.rates.usd_egp),
            },
        }


class OptimizationAdvisor(ABC):
    """External service that proposes schedule changes."""

    @abstractmethod
    def optimize(self, request: AdvisorRequest) -> OptimizationPlan:
        """Return a plan of deferrals and new transfers/injections.

        Raises:
            AdvisorError: If the service fails or its response is unusable
        """
        ...

    @abstractmethod
    def assess_liquidity(self, snapshots: Sequence[LedgerRow], currency: Currency) -> str:
        """Return a short commentary on a projected balance series."""
        ...


class OptimizationService:
    """Service that brokers between the session store and an advisor."""

    def __init__(self, session: PlanningSession, advisor: OptimizationAdvisor):
        """Initialize optimization service.

        Args:
            session: Planning session holding the store and audit log
            advisor: Advisor used for plans and assessments
        """
        self.session = session
        self.db = session.db
        self.audit = session.audit
        self.advisor = advisor

    def build_request(self, max_deferral_days: int, rates: ExchangeRates) -> AdvisorRequest:
        """Snapshot the store for the advisor."""
        if max_deferral_days < 0:
            raise ValidationError("Max deferral days must not be negative")
        return AdvisorRequest(
            transactions=tuple(transaction_snapshot(t) for t in self.db.list_transactions()),
            opening_balances=self.db.get_opening_balances(),
            max_deferral_days=max_deferral_days,
            rates=rates,
        )

    def request_plan(self, max_deferral_days: int, rates: ExchangeRates) -> OptimizationPlan:
        """Ask the advisor for a plan. The store is never modified.

        Raises:
            ValidationError: If the request parameters are invalid
            AdvisorError: If the advisor fails for any reason
        """
        request = self.build_request(max_deferral_days, rates)
        try:
            plan = self.advisor.optimize(request)
        except AdvisorError as e:
            logger.warning("advisor failed", extra={"error": str(e)})
            raise
        except Exception as e:
            logger.warning("advisor raised unexpectedly", exc_info=True)
            raise AdvisorError(f"Optimization failed: {e}") from e
        if not isinstance(plan, OptimizationPlan):
            raise AdvisorError("Advisor returned no plan")
        logger.info(
            "plan received",
            extra={
                "adjustments": len(plan.adjustments),
                "new_transactions": len(plan.new_transactions),
                "skipped_entries": plan.skipped_entries,
            },
        )
        return plan

    def assess_liquidity(
        self, currency: Currency | str, horizon_days: int = DEFAULT_HORIZON_DAYS
    ) -> str:
        """Ask the advisor to comment on the weekly balance snapshots of ``currency``.

        Raises:
            AdvisorError: If the advisor fails for any reason
        """
        currency = Currency.parse(currency)
        rows = LedgerService(self.session).project(currency, horizon_days=horizon_days)
        try:
            return self.advisor.assess_liquidity(weekly_snapshots(rows), currency)
        except AdvisorError:
            raise
        except Exception as e:
            logger.warning("liquidity assessment failed", exc_info=True)
            raise AdvisorError(f"Assessment failed: {e}") from e

    def apply_plan(
        self,
        plan: OptimizationPlan,
        rates: ExchangeRates,
        enforce_constraints: bool = False,
        max_deferral_days: Optional[int] = None,
    ) -> ApplyResult:
        """Apply a plan to the store in one atomic replacement.

        Deferrals overwrite the adjusted date of transactions that still
        exist; unknown ids are skipped. Transfers become a locked Payable in
        the source account and a locked Receivable of the converted amount
        in the target account. Injections become one locked Receivable.

        Args:
            plan: Plan returned by ``request_plan``
            rates: Rates used to convert transfer amounts
            enforce_constraints: Skip deferrals on locked transactions, before
                the original date, or past ``max_deferral_days``
            max_deferral_days: Deferral window checked when enforcing

        Returns:
            ApplyResult with counts and the created transactions
        """
        current = {txn.id: txn for txn in self.db.list_transactions()}
        messages: list[str] = []
        applied_adjustments = skipped_adjustments = 0

        for adjustment in plan.adjustments:
            txn = current.get(adjustment.transaction_id)
            if txn is None:
                logger.debug(
                    "plan adjustment ignored, transaction absent",
                    extra={"transaction_id": adjustment.transaction_id},
                )
                skipped_adjustments += 1
                continue
            if enforce_constraints:
                problem = self._constraint_violation(txn, adjustment, max_deferral_days)
                if problem is not None:
                    messages.append(f'Skipped AI deferral for "{txn.partner}": {problem}.')
                    skipped_adjustments += 1
                    continue
            current[txn.id] = replace(txn, adjusted_date=adjustment.suggested_date)
            applied_adjustments += 1

        created: list[Transaction] = []
        skipped_proposals = 0
        for proposal in plan.new_transactions:
            try:
                legs, message = self._materialize(proposal, rates)
            except DomainError as e:
                messages.append(f"Skipped AI {proposal.kind.value.lower()}: {e}.")
                skipped_proposals += 1
                continue
            created.extend(legs)
            messages.append(message)

        self.db.replace_all(list(current.values()) + created)

        for message in messages:
            self.audit.append(message)
        applied_proposals = len(plan.new_transactions) - skipped_proposals
        summary = (
            f"Applied AI Optimization Plan: {applied_adjustments} deferrals, "
            f"{applied_proposals} new transactions."
        )
        if skipped_adjustments or skipped_proposals:
            summary += f" Skipped {skipped_adjustments} deferrals, {skipped_proposals} new transactions."
        self.audit.append(summary)

        return ApplyResult(
            applied_adjustments=applied_adjustments,
            skipped_adjustments=skipped_adjustments,
            applied_proposals=applied_proposals,
            skipped_proposals=skipped_proposals,
            created=tuple(created),
        )

    def _constraint_violation(
        self,
        txn: Transaction,
        adjustment: PlanAdjustment,
        max_deferral_days: Optional[int],
    ) -> Optional[str]:
        if txn.is_locked:
            return "transaction is locked"
        if adjustment.suggested_date < txn.original_date:
            return f"{adjustment.suggested_date.isoformat()} is before the original date"
        if max_deferral_days is not None:
            latest = txn.original_date + timedelta(days=max_deferral_days)
            if adjustment.suggested_date > latest:
                return deferral_out_of_window(txn.id, adjustment.suggested_date, latest)
        return None

    def _materialize(
        self, proposal: PlanProposal, rates: ExchangeRates
    ) -> tuple[list[Transaction], str]:
        amount = Decimal(proposal.amount)
        if amount < 0:
            raise ValidationError(f"amount must not be negative (got {amount})")
        try:
            if proposal.kind == ProposalKind.TRANSFER:
                source = Currency.parse(proposal.source_account)
                target = Currency.parse(proposal.target_account)
            else:
                currency = Currency.parse(proposal.currency)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if proposal.kind == ProposalKind.INJECTION:
            leg = self._new_leg(
                proposal,
                partner=proposal.source_account,
                invoice_no=INJECTION_INVOICE,
                type=TransactionType.RECEIVABLE,
                amount=amount,
                currency=currency,
            )
            return [leg], f"AI Injection: {amount} {currency.value} from {proposal.source_account}"

        converted = convert(amount, proposal.currency, target, rates)
        outgoing = self._new_leg(
            proposal,
            partner=f"Transfer to {target.value}",
            invoice_no=TRANSFER_OUT_INVOICE,
            type=TransactionType.PAYABLE,
            amount=amount,
            currency=source,
        )
        incoming = self._new_leg(
            proposal,
            partner=f"Transfer from {source.value}",
            invoice_no=TRANSFER_IN_INVOICE,
            type=TransactionType.RECEIVABLE,
            amount=converted,
            currency=target,
        )
        return (
            [outgoing, incoming],
            f"AI Transfer: {amount} {source.value} -> {converted} {target.value}",
        )

    def _new_leg(self, proposal: PlanProposal, **values: Any) -> Transaction:
        return Transaction(
            id=self.session.new_id(),
            original_date=proposal.date,
            adjusted_date=proposal.date,
            payment_type=PaymentType.TRANSFER.value,
            is_locked=True,
            **values,
        )

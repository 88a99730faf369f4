"""Validation of advisor responses.

Each adjustment and proposed transaction is validated on its own, so one
malformed entry is dropped without discarding the rest of the plan.
"""

from datetime import date
from decimal import Decimal
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cashplan.domain.entities import (
    OptimizationPlan,
    PlanAdjustment,
    PlanProposal,
    ProposalKind,
)
from cashplan.domain.errors import AdvisorError
from cashplan.logging_config import get_logger

logger = get_logger("advisor.schemas")


class AdjustmentSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transaction_id: str = Field(..., alias="transactionId", min_length=1)
    suggested_date: date = Field(..., alias="suggestedDate")
    reason: str = ""


class NewTransactionSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: ProposalKind = Field(..., alias="type")
    source_account: str = Field(..., alias="sourceAccount", min_length=1)
    target_account: str = Field(..., alias="targetAccount")
    amount: Decimal = Field(..., ge=0)
    currency: str = Field(..., min_length=1)
    on_date: date = Field(..., alias="date")
    reason: str = ""

    @field_validator("kind", mode="before")
    @classmethod
    def _upper_kind(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value


class PlanSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    adjustments: List[Any]
    new_transactions: List[Any] = Field(..., alias="newTransactions")
    summary: str


# JSON schema the advisor is asked to follow
PLAN_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "adjustments": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "transactionId": {"type": "string"},
                    "suggestedDate": {"type": "string", "description": "YYYY-MM-DD"},
                    "reason": {"type": "string"},
                },
                "required": ["transactionId", "suggestedDate", "reason"],
            },
        },
        "newTransactions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "type": {"type": "string", "enum": ["TRANSFER", "INJECTION"]},
                    "sourceAccount": {"type": "string"},
                    "targetAccount": {"type": "string"},
                    "amount": {
                        "type": "number",
                        "description": "Amount in the currency of the source account",
                    },
                    "currency": {"type": "string"},
                    "date": {"type": "string", "description": "YYYY-MM-DD"},
                    "reason": {"type": "string"},
                },
                "required": ["type", "sourceAccount", "targetAccount", "amount", "currency", "date"],
            },
        },
        "summary": {"type": "string"},
    },
    "required": ["adjustments", "newTransactions", "summary"],
}


def plan_from_payload(data: Any) -> OptimizationPlan:
    """Build an OptimizationPlan from decoded advisor JSON.

    Raises:
        AdvisorError: If the payload is not a plan object at all
    """
    try:
        envelope = PlanSchema.model_validate(data)
    except ValidationError as e:
        raise AdvisorError(f"Advisor response is not a plan: {e.error_count()} error(s)") from e

    skipped = 0
    adjustments = []
    for item in envelope.adjustments:
        try:
            parsed = AdjustmentSchema.model_validate(item)
        except ValidationError:
            logger.info("malformed plan adjustment skipped", extra={"entry": repr(item)})
            skipped += 1
            continue
        adjustments.append(
            PlanAdjustment(
                transaction_id=parsed.transaction_id,
                suggested_date=parsed.suggested_date,
                reason=parsed.reason,
            )
        )

    proposals = []
    for item in envelope.new_transactions:
        try:
            parsed = NewTransactionSchema.model_validate(item)
        except ValidationError:
            logger.info("malformed plan transaction skipped", extra={"entry": repr(item)})
            skipped += 1
            continue
        proposals.append(
            PlanProposal(
                kind=parsed.kind,
                source_account=parsed.source_account,
                target_account=parsed.target_account,
                amount=parsed.amount,
                currency=parsed.currency,
                date=parsed.on_date,
                reason=parsed.reason,
            )
        )

    return OptimizationPlan(
        adjustments=tuple(adjustments),
        new_transactions=tuple(proposals),
        summary=envelope.summary,
        skipped_entries=skipped,
    )

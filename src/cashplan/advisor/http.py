"""HTTP adapter for a language-model backed optimization advisor."""

from typing import Any, Optional, Sequence

import requests

from cashplan.advisor.prompts import build_assessment_prompt, build_optimization_prompt
from cashplan.advisor.schemas import PLAN_RESPONSE_SCHEMA, plan_from_payload
from cashplan.config import Settings
from cashplan.domain.entities import Currency, LedgerRow, OptimizationPlan
from cashplan.domain.errors import AdvisorError
from cashplan.domain.optimization import AdvisorRequest, OptimizationAdvisor
from cashplan.logging_config import get_logger

logger = get_logger("advisor.http")

NO_ANALYSIS = "No analysis generated."


class HTTPOptimizationAdvisor(OptimizationAdvisor):
    """Posts advisor tasks as JSON to a model gateway endpoint.

    The endpoint receives ``{"task", "model", "prompt", "context"}`` (plus a
    ``responseSchema`` for optimization) and answers with the plan object,
    or ``{"text": ...}`` for assessments.
    """

    def __init__(
        self,
        url: str,
        api_key: Optional[str],
        model: str,
        timeout: int = 120,
    ):
        self.url = url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "HTTPOptimizationAdvisor":
        return cls(
            url=settings.advisor_url,
            api_key=settings.advisor_api_key,
            model=settings.advisor_model,
            timeout=settings.advisor_timeout,
        )

    def _post(self, payload: dict[str, Any]) -> Any:
        if not self.api_key:
            raise AdvisorError("API Key is missing.")
        try:
            resp = requests.post(
                self.url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            raise AdvisorError(f"Advisor request failed: {e}") from e
        try:
            return resp.json()
        except ValueError as e:
            raise AdvisorError("Advisor returned a response that is not JSON") from e

    def optimize(self, request: AdvisorRequest) -> OptimizationPlan:
        logger.info("requesting optimization plan", extra={"transactions": len(request.transactions)})
        data = self._post(
            {
                "task": "optimize",
                "model": self.model,
                "prompt": build_optimization_prompt(request),
                "context": request.to_payload(),
                "responseSchema": PLAN_RESPONSE_SCHEMA,
            }
        )
        if not data:
            raise AdvisorError("Empty response from advisor")
        return plan_from_payload(data)

    def assess_liquidity(self, snapshots: Sequence[LedgerRow], currency: Currency) -> str:
        data = self._post(
            {
                "task": "assess",
                "model": self.model,
                "prompt": build_assessment_prompt(snapshots, currency),
                "context": {
                    "currency": currency.value,
                    "snapshots": [
                        {"date": row.date.isoformat(), "balance": float(row.balance)}
                        for row in snapshots
                    ],
                },
            }
        )
        text = data.get("text") if isinstance(data, dict) else None
        return text.strip() if isinstance(text, str) and text.strip() else NO_ANALYSIS

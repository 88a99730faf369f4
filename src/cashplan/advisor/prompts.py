"""Instruction text sent to the language-model advisor."""

import json
from typing import Sequence

from cashplan.domain.entities import Currency, LedgerRow
from cashplan.domain.optimization import AdvisorRequest


def build_optimization_prompt(request: AdvisorRequest) -> str:
    """Instructions for the schedule optimization task."""
    payload = request.to_payload()
    rates = payload["rates"]
    return f"""
You are a cash flow optimization assistant.
OBJECTIVE: Minimize negative cash balances across all accounts (EGP, USD, EUR) over the next 90 days.

CONTEXT:
Exchange Rates:
1 EUR = {rates["eurUsd"]} USD
1 USD = {rates["usdEgp"]} EGP

CONSTRAINTS:
1. You can defer 'Payable' transactions that are NOT locked.
2. You cannot move a date earlier than its 'originalDate'.
3. You cannot defer a payment more than {request.max_deferral_days} days past its 'originalDate'.
4. Suggest internal transfers between EGP, USD and EUR to cover deficits. Express the transfer amount in the source account's currency, estimated with the exchange rates above.
5. If deficits persist, suggest injections from 'Bank Debt' or 'SH Account'.

CURRENT STATE:
Opening Balances: {json.dumps(payload["openingBalances"])}
Transactions: {json.dumps(payload["transactions"])}

Respond with JSON containing specific date adjustments and new transfer transactions.
""".strip()


def build_assessment_prompt(snapshots: Sequence[LedgerRow], currency: Currency) -> str:
    """Instructions for the liquidity commentary task."""
    summary = "\n".join(
        f"{row.date.isoformat()}: Balance {round(row.balance)}" for row in snapshots
    )
    return f"""
You are a senior financial analyst.
Analyze the following projected cash flow for the {currency.value} account over the next 90 days.

Data points (weekly snapshots):
{summary}

Provide a concise assessment (max 3 sentences) of the liquidity health.
Point out any critical periods where the balance dips negative or dangerously low.
Suggest one actionable strategy if there is a risk.
""".strip()

"""CLI helpers for reaching the planning session and parsing shared options."""

from datetime import date
from decimal import Decimal

import click

from cashplan.config import Settings
from cashplan.domain.entities import Currency, ExchangeRates
from cashplan.domain.errors import DomainError
from cashplan.domain.session import PlanningSession
from cashplan.domain.transaction import TransactionService
from cashplan.utils.amount_parser import parse_amount
from cashplan.utils.date_parser import parse_date
from cashplan.utils.transaction_resolver import resolve_transaction

CURRENCY_CHOICES = [currency.value for currency in Currency]


def get_session(ctx: click.Context) -> PlanningSession:
    return ctx.obj["session"]


def get_settings(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


def parse_cli_date(ctx: click.Context, value: str, label: str = "date") -> date:
    """Parse a date option relative to the session's today, or exit."""
    try:
        return parse_date(value, today=get_session(ctx).clock.today())
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def parse_cli_amount(ctx: click.Context, value: str, label: str = "amount") -> Decimal:
    """Parse an amount option, or exit."""
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_transaction_or_exit(ctx: click.Context, reference: str) -> str:
    """Resolve a transaction id or invoice number, or exit with a CLI error."""
    try:
        return resolve_transaction(TransactionService(get_session(ctx)), reference)
    except DomainError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def parse_opening_balances(values: tuple[str, ...]) -> dict[Currency, Decimal]:
    """Parse repeated ``CUR=AMOUNT`` options.

    Raises:
        click.BadParameter: If an entry is malformed
    """
    balances: dict[Currency, Decimal] = {}
    for value in values:
        name, sep, amount = value.partition("=")
        if not sep:
            raise click.BadParameter(f"'{value}' is not CUR=AMOUNT", param_hint="--opening")
        try:
            balances[Currency.parse(name)] = parse_amount(amount)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--opening")
    return balances


def rates_from_options(settings: Settings, eur_usd: str | None, usd_egp: str | None) -> ExchangeRates:
    """Exchange rates from options, falling back to settings."""
    try:
        return ExchangeRates(
            eur_usd=parse_amount(eur_usd) if eur_usd else settings.eur_usd,
            usd_egp=parse_amount(usd_egp) if usd_egp else settings.usd_egp,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))


def format_money(amount: Decimal) -> str:
    return f"{amount:,.2f}"

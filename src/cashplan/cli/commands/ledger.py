"""Ledger projection and conversion commands."""

import click

from cashplan.cli.context import (
    CURRENCY_CHOICES,
    format_money,
    get_session,
    get_settings,
    parse_cli_amount,
    rates_from_options,
)
from cashplan.cli.error_handling import handle_domain_error
from cashplan.domain.conversion import convert
from cashplan.domain.errors import DomainError
from cashplan.domain.ledger import LedgerService, lowest_balance


@click.command("ledger")
@click.option("--currency", required=True, type=click.Choice(CURRENCY_CHOICES, case_sensitive=False))
@click.option("--days", type=int, help="Horizon in days (defaults to CASHPLAN_HORIZON_DAYS)")
@click.option("--changes-only", is_flag=True, help="Only print days with activity")
@click.pass_context
def show_ledger(ctx, currency: str, days: int | None, changes_only: bool):
    """Project the daily running balance of one account."""
    horizon = days if days is not None else get_settings(ctx).horizon_days
    if horizon < 0:
        click.echo("Error: --days must not be negative", err=True)
        ctx.exit(1)

    rows = LedgerService(get_session(ctx)).project(currency, horizon_days=horizon)

    click.echo(f"\n{currency} ledger, {rows[0].date.isoformat()} to {rows[-1].date.isoformat()}")
    click.echo("-" * 72)
    click.echo(f"{'Date':<12} {'Credit':>14} {'Debit':>14} {'Net':>14} {'Balance':>14}")
    click.echo("-" * 72)
    for row in rows:
        if changes_only and not (row.credit or row.debit):
            continue
        click.echo(
            f"{row.date.isoformat():<12} {format_money(row.credit):>14} "
            f"{format_money(row.debit):>14} {format_money(row.net):>14} "
            f"{format_money(row.balance):>14}"
        )
    click.echo("-" * 72)

    lowest = lowest_balance(rows)
    note = " (SHORTFALL)" if lowest.balance < 0 else ""
    click.echo(f"Lowest balance: {format_money(lowest.balance)} on {lowest.date.isoformat()}{note}")
    click.echo(f"Closing balance: {format_money(rows[-1].balance)}")


@click.command("convert")
@click.option("--amount", required=True, help="Amount to convert")
@click.option("--from", "from_currency", required=True, help="Source currency (EGP, USD or EUR)")
@click.option("--to", "to_currency", required=True, help="Target currency (EGP, USD or EUR)")
@click.option("--eur-usd", help="EUR to USD rate (defaults to CASHPLAN_EUR_USD)")
@click.option("--usd-egp", help="USD to EGP rate (defaults to CASHPLAN_USD_EGP)")
@click.pass_context
def convert_amount(ctx, amount: str, from_currency: str, to_currency: str, eur_usd: str | None, usd_egp: str | None):
    """Convert an amount between EGP, USD and EUR.

    Examples:
        cashplan convert --amount 1000 --from EUR --to USD --eur-usd 1.10
    """
    rates = rates_from_options(get_settings(ctx), eur_usd, usd_egp)
    value = parse_cli_amount(ctx, amount)
    try:
        result = convert(value, from_currency, to_currency, rates)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"{value} {from_currency} = {result} {to_currency}")


def register_commands(cli: click.Group) -> None:
    """Register ledger commands with main CLI."""
    cli.add_command(show_ledger)
    cli.add_command(convert_amount)

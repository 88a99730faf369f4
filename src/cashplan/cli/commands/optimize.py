"""Optimization advisor commands."""

import click

from cashplan.advisor.http import HTTPOptimizationAdvisor
from cashplan.cli.context import (
    CURRENCY_CHOICES,
    get_session,
    get_settings,
    rates_from_options,
)
from cashplan.cli.error_handling import handle_domain_error
from cashplan.domain.errors import AdvisorError, ValidationError
from cashplan.domain.optimization import OptimizationAdvisor, OptimizationService


def get_advisor(ctx: click.Context) -> OptimizationAdvisor:
    """Advisor injected into the context object, else the HTTP one from settings."""
    advisor = ctx.obj.get("advisor")
    if advisor is None:
        advisor = HTTPOptimizationAdvisor.from_settings(get_settings(ctx))
        ctx.obj["advisor"] = advisor
    return advisor


@click.command("optimize")
@click.option("--max-days", type=int, help="Maximum deferral in days (defaults to CASHPLAN_MAX_DEFERRAL_DAYS)")
@click.option("--eur-usd", help="EUR to USD rate (defaults to CASHPLAN_EUR_USD)")
@click.option("--usd-egp", help="USD to EGP rate (defaults to CASHPLAN_USD_EGP)")
@click.option("--apply", "apply_plan", is_flag=True, help="Apply the plan after printing it")
@click.option("--strict", is_flag=True, help="Skip deferrals that are locked or outside the window")
@click.pass_context
def optimize(ctx, max_days: int | None, eur_usd: str | None, usd_egp: str | None, apply_plan: bool, strict: bool):
    """Ask the advisor for a deferral and transfer plan."""
    settings = get_settings(ctx)
    session = get_session(ctx)
    max_days = settings.max_deferral_days if max_days is None else max_days
    rates = rates_from_options(settings, eur_usd, usd_egp)
    service = OptimizationService(session, get_advisor(ctx))

    try:
        plan = service.request_plan(max_days, rates)
    except (AdvisorError, ValidationError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nStrategy: {plan.summary or '(none)'}")
    if plan.adjustments:
        click.echo(f"\nDeferrals ({len(plan.adjustments)}):")
        for adjustment in plan.adjustments:
            txn = session.db.get_transaction(adjustment.transaction_id)
            label = txn.partner if txn else f"{adjustment.transaction_id} (unknown)"
            click.echo(f"  {label:<24} -> {adjustment.suggested_date.isoformat()}  {adjustment.reason}")
    if plan.new_transactions:
        click.echo(f"\nNew transactions ({len(plan.new_transactions)}):")
        for proposal in plan.new_transactions:
            click.echo(
                f"  {proposal.kind.value:<9} {proposal.source_account} -> {proposal.target_account} "
                f"{proposal.amount} {proposal.currency} on {proposal.date.isoformat()}  {proposal.reason}"
            )
    if plan.skipped_entries:
        click.echo(f"\nIgnored {plan.skipped_entries} malformed plan entries")

    if not apply_plan:
        return

    result = service.apply_plan(
        plan,
        rates,
        enforce_constraints=strict,
        max_deferral_days=max_days if strict else None,
    )
    click.echo(
        f"\nApplied {result.applied_adjustments} deferrals and "
        f"{result.applied_proposals} new transactions"
    )
    if result.skipped_adjustments or result.skipped_proposals:
        click.echo(
            f"Skipped {result.skipped_adjustments} deferrals and "
            f"{result.skipped_proposals} new transactions (see log)"
        )


@click.command("assess")
@click.option("--currency", required=True, type=click.Choice(CURRENCY_CHOICES, case_sensitive=False))
@click.option("--days", type=int, help="Horizon in days (defaults to CASHPLAN_HORIZON_DAYS)")
@click.pass_context
def assess(ctx, currency: str, days: int | None):
    """Ask the advisor to comment on the weekly balance outlook."""
    settings = get_settings(ctx)
    service = OptimizationService(get_session(ctx), get_advisor(ctx))
    try:
        text = service.assess_liquidity(currency, settings.horizon_days if days is None else days)
    except AdvisorError as e:
        handle_domain_error(ctx, e)
    click.echo(text)


def register_commands(cli: click.Group) -> None:
    """Register optimization commands with main CLI."""
    cli.add_command(optimize)
    cli.add_command(assess)

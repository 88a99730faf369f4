"""Main CLI entry point."""

import click

from cashplan.cli.context import parse_opening_balances
from cashplan.config import Settings
from cashplan.domain.clock import FixedClock, SystemClock
from cashplan.domain.csv_import import CSVImportService
from cashplan.domain.session import PlanningSession
from cashplan.logging_config import configure_logging
from cashplan.utils.date_parser import parse_date

# Import and register all commands at module level
from cashplan.cli.commands import (
    transactions,
    ledger,
    optimize,
    export,
)


@click.group(chain=True)
@click.option(
    "--file",
    "ledger_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Ledger file to import (8 comma-separated columns, dates as DD/MM/YYYY)",
)
@click.option(
    "--opening",
    "openings",
    multiple=True,
    metavar="CUR=AMOUNT",
    help="Opening balance for an account, e.g. --opening USD=1000 (repeatable)",
)
@click.option(
    "--today",
    help="Planning date (YYYY-MM-DD); overrides CASHPLAN_TODAY, defaults to the system date",
    envvar="CASHPLAN_TODAY",
)
@click.pass_context
def cli(ctx, ledger_file: str | None, openings: tuple[str, ...], today: str | None):
    """Cashplan - 90-day cash-flow planner.

    Loads a ledger file into an in-memory session, then runs the chained
    commands against it, e.g.:

        cashplan --file ledger.csv --opening USD=0 split --ref INV-002 --part ... ledger --currency EGP
    """
    ctx.ensure_object(dict)

    # Build the session only when actually running a command (not for help)
    if ctx.invoked_subcommand is None:
        return

    settings = ctx.obj.get("settings") or Settings.from_env()
    configure_logging(level=settings.log_level)

    if today:
        try:
            clock = FixedClock(parse_date(today))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--today")
    else:
        clock = SystemClock()

    balances = parse_opening_balances(openings)
    session = PlanningSession.in_memory(clock)
    ctx.call_on_close(session.close)
    ctx.obj["session"] = session
    ctx.obj["settings"] = settings

    if ledger_file:
        result = CSVImportService(session).import_file(ledger_file, opening_balances=balances)
        click.echo(f"Imported {result['imported']} transactions from {ledger_file}")
        if result["clamped"]:
            click.echo(f"  {len(result['clamped'])} adjusted date(s) moved to {clock.today().isoformat()}")
        for error in result["errors"]:
            click.echo(f"  Skipped: {error}", err=True)
    elif balances:
        session.db.set_opening_balances(balances)


# Register all commands
transactions.register_commands(cli)
ledger.register_commands(cli)
optimize.register_commands(cli)
export.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

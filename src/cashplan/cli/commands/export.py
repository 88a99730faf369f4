"""Export and audit log commands."""

import click

from cashplan.cli.context import get_session
from cashplan.domain.csv_format import export_transactions, write_export


@click.command("export")
@click.argument("output", type=click.Path(dir_okay=False, allow_dash=True))
@click.pass_context
def export_ledger(ctx, output: str):
    """Write all transactions as a ledger file ("-" for stdout)."""
    session = get_session(ctx)
    transactions = session.db.list_transactions()
    if output == "-":
        click.echo(export_transactions(transactions))
        return
    try:
        write_export(output, transactions)
    except OSError as e:
        click.echo(f"Error: Cannot write {output}: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Exported {len(transactions)} transactions to {output}")


@click.command("log")
@click.pass_context
def show_log(ctx):
    """Print the session's audit trail in the order it was written."""
    audit = get_session(ctx).audit
    if not len(audit):
        click.echo("No log entries.")
        return
    click.echo(audit.render())


def register_commands(cli: click.Group) -> None:
    """Register export commands with main CLI."""
    cli.add_command(export_ledger)
    cli.add_command(show_log)

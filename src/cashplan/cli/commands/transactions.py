"""Transaction management commands."""

import click

from cashplan.cli.context import (
    CURRENCY_CHOICES,
    format_money,
    get_session,
    parse_cli_amount,
    parse_cli_date,
    resolve_transaction_or_exit,
)
from cashplan.cli.error_handling import handle_domain_error
from cashplan.domain.entities import SplitPart, TransactionType
from cashplan.domain.errors import DomainError
from cashplan.domain.transaction import TransactionService


@click.command("list")
@click.option("--currency", type=click.Choice(CURRENCY_CHOICES, case_sensitive=False), help="Only this account")
@click.option("--date", "on_date", help="Only transactions planned for this day (use with --currency)")
@click.pass_context
def list_transactions(ctx, currency: str | None, on_date: str | None):
    """View transactions, optionally one ledger cell (currency + day)."""
    service = TransactionService(get_session(ctx))
    day = parse_cli_date(ctx, on_date) if on_date else None
    transactions = service.list_transactions(currency=currency, on_date=day)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 118)
    click.echo(
        f"{'ID':<13} {'Original':<11} {'Adjusted':<11} {'Def':>4} {'Partner':<22} "
        f"{'Invoice':<14} {'Type':<11} {'Amount':>14} {'Cur':<10} {'Lock':<4}"
    )
    click.echo("-" * 118)
    for txn in transactions:
        click.echo(
            f"{txn.id:<13} {txn.original_date.isoformat():<11} {txn.adjusted_date.isoformat():<11} "
            f"{txn.deferral_days:>4} {txn.partner[:22]:<22} {txn.invoice_no[:14]:<14} "
            f"{txn.type.value:<11} {format_money(txn.amount):>14} {txn.currency.value:<10} "
            f"{'yes' if txn.is_locked else '':<4}"
        )


@click.command("add")
@click.option("--partner", required=True, help="Counterparty name")
@click.option(
    "--type",
    "txn_type",
    required=True,
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
)
@click.option("--amount", required=True, help="Amount (e.g., 1500 or 1,500.00)")
@click.option("--currency", required=True, type=click.Choice(CURRENCY_CHOICES, case_sensitive=False))
@click.option("--invoice", default="", help="Invoice number")
@click.option("--payment-type", default="transfer", show_default=True, help="cheque, transfer, cash or free text")
@click.option("--original-date", help="Contractual due date (defaults to today)")
@click.option("--adjusted-date", help="Planned settlement date (defaults to today)")
@click.pass_context
def add_transaction(
    ctx,
    partner: str,
    txn_type: str,
    amount: str,
    currency: str,
    invoice: str,
    payment_type: str,
    original_date: str | None,
    adjusted_date: str | None,
):
    """Manually add a transaction."""
    service = TransactionService(get_session(ctx))
    try:
        txn = service.create_transaction(
            partner=partner,
            type=txn_type,
            amount=parse_cli_amount(ctx, amount),
            currency=currency,
            invoice_no=invoice,
            payment_type=payment_type,
            original_date=parse_cli_date(ctx, original_date, "original date") if original_date else None,
            adjusted_date=parse_cli_date(ctx, adjusted_date, "adjusted date") if adjusted_date else None,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created transaction {txn.id} ({txn.partner}, {txn.amount} {txn.currency.value})")


@click.command("adjust")
@click.argument("reference")
@click.argument("new_date")
@click.pass_context
def adjust_date(ctx, reference: str, new_date: str):
    """Move the planned date of a transaction (id or invoice number)."""
    service = TransactionService(get_session(ctx))
    transaction_id = resolve_transaction_or_exit(ctx, reference)
    target = parse_cli_date(ctx, new_date)

    txn = service.adjust_date(transaction_id, target)
    if txn is not None and txn.is_locked:
        click.echo(f"Transaction {transaction_id} is locked; date unchanged")
    else:
        click.echo(f"Transaction {transaction_id} planned for {target.isoformat()}")


@click.command("lock")
@click.argument("reference")
@click.pass_context
def toggle_lock(ctx, reference: str):
    """Lock or unlock a transaction (toggles)."""
    service = TransactionService(get_session(ctx))
    transaction_id = resolve_transaction_or_exit(ctx, reference)
    txn = service.toggle_lock(transaction_id)
    click.echo(f"Transaction {transaction_id} {'locked' if txn.is_locked else 'unlocked'}")


@click.command("delete")
@click.argument("reference")
@click.pass_context
def delete_transaction(ctx, reference: str):
    """Delete a transaction."""
    service = TransactionService(get_session(ctx))
    transaction_id = resolve_transaction_or_exit(ctx, reference)
    removed = service.delete_transaction(transaction_id)
    click.echo(f"Deleted transaction {transaction_id} ({removed.partner})")


@click.command("split")
@click.option("--ref", "reference", required=True, help="Transaction id or invoice number")
@click.option(
    "--part",
    "parts",
    multiple=True,
    required=True,
    metavar="AMOUNT@DATE",
    help="One slice, e.g. --part 100@2023-10-01 (repeatable)",
)
@click.pass_context
def split_transaction(ctx, reference: str, parts: tuple[str, ...]):
    """Split a transaction into several dated parts.

    The parts must add up to the transaction amount.

    Examples:
        cashplan --file ledger.csv split --ref INV-002 --part 100@today --part 200@+5
    """
    service = TransactionService(get_session(ctx))
    transaction_id = resolve_transaction_or_exit(ctx, reference)

    split_parts = []
    for part in parts:
        amount, sep, day = part.rpartition("@")
        if not sep:
            click.echo(f"Error: Invalid part '{part}', expected AMOUNT@DATE", err=True)
            ctx.exit(1)
        split_parts.append(
            SplitPart(amount=parse_cli_amount(ctx, amount), date=parse_cli_date(ctx, day))
        )

    try:
        pieces = service.split_transaction(transaction_id, split_parts)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Split transaction {transaction_id} into {len(pieces)} parts:")
    for piece in pieces:
        click.echo(f"  {piece.id} {piece.invoice_no} {piece.amount} on {piece.adjusted_date.isoformat()}")


@click.command("transfer")
@click.option("--credit", "credit_account", required=True, type=click.Choice(CURRENCY_CHOICES, case_sensitive=False), help="Account receiving funds")
@click.option("--debit", "debit_account", required=True, type=click.Choice(CURRENCY_CHOICES, case_sensitive=False), help="Account funds are taken from")
@click.option("--amount", required=True, help="Amount in the credit account's currency")
@click.option("--rate", required=True, help="1 credit unit = RATE debit units")
@click.option("--date", "on_date", default="today", show_default=True, help="Transfer date")
@click.pass_context
def internal_transfer(ctx, credit_account: str, debit_account: str, amount: str, rate: str, on_date: str):
    """Record an internal transfer between two accounts."""
    service = TransactionService(get_session(ctx))
    try:
        credit_leg, debit_leg = service.internal_transfer(
            credit_account,
            debit_account,
            parse_cli_amount(ctx, amount),
            parse_cli_amount(ctx, rate, "rate"),
            parse_cli_date(ctx, on_date),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Transfer recorded: +{credit_leg.amount} {credit_leg.currency.value}, "
        f"-{debit_leg.amount} {debit_leg.currency.value} on {credit_leg.adjusted_date.isoformat()}"
    )


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    for command in (
        list_transactions,
        add_transaction,
        adjust_date,
        toggle_lock,
        delete_transaction,
        split_transaction,
        internal_transfer,
    ):
        cli.add_command(command)

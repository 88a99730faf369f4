"""CLI error handling helpers."""

import click

from cashplan.domain.errors import AdvisorError, DomainError


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Print a domain error to stderr and exit 1.

    Advisor failures also name the settings that point at the advisor.
    """
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, AdvisorError):
        click.echo(
            "Hint: the advisor is configured through CASHPLAN_ADVISOR_URL and CASHPLAN_ADVISOR_API_KEY",
            err=True,
        )
    ctx.exit(1)

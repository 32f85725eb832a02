"""Quote management commands."""

import json

import click
from configurator.cli.display import echo_quote
from configurator.cli.error_handling import handle_domain_error
from configurator.cli.quote_resolution import resolve_quote_or_exit
from configurator.domain.entities import QuoteStatus
from configurator.domain.errors import DomainError
from configurator.domain.quote import QuoteLedger
from configurator.domain.serialization import quote_to_dict
from configurator.utils.date_parser import parse_date

STATUS_CHOICES = [status.value for status in QuoteStatus]


@click.group()
def quote_group():
    """Manage saved quotes."""
    pass


@quote_group.command("list")
@click.option(
    "--status", type=click.Choice(STATUS_CHOICES, case_sensitive=False), help="Filter by status"
)
@click.option("--since", help="Only quotes created on or after this date")
@click.option("--until", help="Only quotes created on or before this date")
@click.pass_context
def list_quotes(ctx, status: str | None, since: str | None, until: str | None):
    """List saved quotes.

    Examples:
        configurator quote list
        configurator quote list --status Draft --since "this month"
    """
    ledger = QuoteLedger(ctx.obj["db"])

    start = None
    end = None
    try:
        if since:
            start = parse_date(since)
        if until:
            end = parse_date(until)
        quotes = ledger.list_quotes(status=status)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if start is not None:
        quotes = [q for q in quotes if q.created_date.date() >= start]
    if end is not None:
        quotes = [q for q in quotes if q.created_date.date() <= end]

    if not quotes:
        click.echo("No quotes found.")
        return

    click.echo("\nQuotes:")
    click.echo("-" * 78)
    for q in quotes:
        click.echo(
            f"{q.quote_number:18s} | {q.status.value:9s} | {q.created_date_formatted} | "
            f"{q.bill_of_materials.total_formatted:>14s}"
        )


@quote_group.command("show")
@click.argument("reference", metavar="QUOTE")
@click.pass_context
def show_quote(ctx, reference: str):
    """Show a quote and its bill of materials.

    QUOTE can be a quote number or quote ID.
    """
    ledger = QuoteLedger(ctx.obj["db"])
    echo_quote(resolve_quote_or_exit(ctx, ledger, reference))


@quote_group.command("status")
@click.argument("reference", metavar="QUOTE")
@click.argument("status", type=click.Choice(STATUS_CHOICES, case_sensitive=False))
@click.pass_context
def set_status(ctx, reference: str, status: str):
    """Change the status of a quote.

    Examples:
        configurator quote status QT-20261019-0001 Submitted
    """
    ledger = QuoteLedger(ctx.obj["db"])
    quote = resolve_quote_or_exit(ctx, ledger, reference)

    try:
        updated = ledger.update_status(quote, status)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Quote {updated.quote_number} is now {updated.status.value}")


@quote_group.command("delete")
@click.argument("reference", metavar="QUOTE")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_quote(ctx, reference: str, yes: bool):
    """Delete a saved quote."""
    ledger = QuoteLedger(ctx.obj["db"])
    quote = resolve_quote_or_exit(ctx, ledger, reference)

    if not yes and not click.confirm(f"Are you sure you want to delete quote {quote.quote_number}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        ledger.delete(quote)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted quote {quote.quote_number}")


@quote_group.command("export")
@click.argument("reference", metavar="QUOTE")
@click.pass_context
def export_quote(ctx, reference: str):
    """Print a quote as a fully resolved JSON document."""
    ledger = QuoteLedger(ctx.obj["db"])
    quote = resolve_quote_or_exit(ctx, ledger, reference)
    click.echo(json.dumps(quote_to_dict(quote), indent=2))


def register_commands(cli):
    """Register quote commands with main CLI."""
    cli.add_command(quote_group, name="quote")

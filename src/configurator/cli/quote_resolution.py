"""CLI helpers for quote resolution."""

from __future__ import annotations

import click
from configurator.domain.entities import Quote
from configurator.domain.errors import NotFoundError, quote_not_found
from configurator.domain.quote import QuoteLedger


def resolve_quote(ledger: QuoteLedger, reference: str) -> Quote:
    """Resolve a quote by id or quote number.

    Raises:
        NotFoundError: If no saved quote matches
    """
    quote = ledger.get_quote(reference) or ledger.find_by_number(reference)
    if quote is None:
        raise NotFoundError(quote_not_found(reference))
    return quote


def resolve_quote_or_exit(ctx: click.Context, ledger: QuoteLedger, reference: str) -> Quote:
    """Resolve a quote, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_quote(ledger, reference)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)

"""Configuration commands: explore options and price an assembly."""

import click
from configurator.cli.display import echo_bill, echo_component
from configurator.cli.error_handling import handle_domain_error
from configurator.domain.catalog import CatalogService
from configurator.domain.errors import DomainError
from configurator.domain.quote import QuoteLedger
from configurator.domain.session import ConfigurationSession


def _build_session(db, base: str, parts: tuple[str, ...]) -> ConfigurationSession:
    """Run the selection steps for a base and parts, in the given order."""
    session = ConfigurationSession(CatalogService(db))
    session.select_base(base)
    session.next_step()
    for part in parts:
        session.select_component(part)
    return session


@click.command("options")
@click.argument("base")
@click.option("--part", "parts", multiple=True, help="Part to select first (repeatable)")
@click.pass_context
def show_options(ctx, base: str, parts: tuple[str, ...]):
    """Show the components still available after selecting BASE and parts.

    Examples:
        configurator options BASE-001
        configurator options BASE-001 --part MOTOR-001
    """
    try:
        session = _build_session(ctx.obj["db"], base, parts)
    except DomainError as e:
        handle_domain_error(ctx, e)

    for category, components in session.available.items():
        click.echo(f"\n{category.value}:")
        if not components:
            click.echo("  (none available)")
            continue
        for component in components:
            echo_component(component, selected=session.is_selected(component.id))


@click.command("configure")
@click.argument("base")
@click.option("--part", "parts", multiple=True, help="Part to add (repeatable)")
@click.option("--notes", help="Notes to attach to the quote")
@click.option("--save", is_flag=True, help="Save the result as a draft quote")
@click.pass_context
def configure(ctx, base: str, parts: tuple[str, ...], notes: str | None, save: bool):
    """Configure an assembly on BASE, price it and optionally save a quote.

    Parts are selected in the order given; each must still be compatible
    with the selection made so far.

    Examples:
        configurator configure BASE-001 --part MOTOR-001 --part GEAR-001
        configurator configure BASE-003 --part MOTOR-003 --save --notes "Line 4"
    """
    db = ctx.obj["db"]

    try:
        session = _build_session(db, base, parts)
        session.next_step()  # previewing
        session.next_step()  # reviewing, prices the configuration
    except DomainError as e:
        handle_domain_error(ctx, e)

    echo_bill(session.bill_of_materials)

    if not save:
        return

    ledger = QuoteLedger(db)
    try:
        quote = ledger.save(session.generate_quote(ledger, notes=notes))
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nSaved quote {quote.quote_number} (ID: {quote.id})")


def register_commands(cli):
    """Register configuration commands with main CLI."""
    cli.add_command(show_options)
    cli.add_command(configure)

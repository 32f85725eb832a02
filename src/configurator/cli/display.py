"""Plain-text rendering of bills of materials and quotes."""

import click

from configurator.domain.entities import BillOfMaterials, Component, Quote
from configurator.utils.money import format_currency


def echo_component(component: Component, selected: bool = False) -> None:
    marker = "*" if selected else " "
    click.echo(
        f"{marker} {component.id:12s} | {component.name:36s} | "
        f"{component.part_number:16s} | {component.price_formatted:>12s}"
    )


def echo_bill(bill: BillOfMaterials) -> None:
    """Print an itemized bill of materials."""
    click.echo("\nBill of materials:")
    click.echo("-" * 78)
    for item in bill.items:
        click.echo(
            f"{item.component.category.value:16s} | {item.component.name:36s} | "
            f"{item.quantity:3d} | {item.line_total_formatted:>14s}"
        )
    click.echo("-" * 78)
    click.echo(f"{'Subtotal':>60s}: {format_currency(bill.subtotal):>14s}")
    for discount in bill.discounts:
        click.echo(f"{discount.description:>60s}: {'-' + discount.amount_formatted:>14s}")
    for charge in bill.additional_charges:
        click.echo(f"{charge.description:>60s}: {charge.amount_formatted:>14s}")
    click.echo(f"{'Tax':>60s}: {format_currency(bill.tax):>14s}")
    click.echo(f"{'Total':>60s}: {bill.total_formatted:>14s}")


def echo_quote(quote: Quote) -> None:
    """Print a quote header followed by its bill of materials."""
    click.echo(f"\nQuote {quote.quote_number}")
    click.echo(f"  ID: {quote.id}")
    click.echo(f"  Status: {quote.status.value}")
    click.echo(f"  Created: {quote.created_date_formatted}")
    base = quote.configuration.base_component
    if base is not None:
        click.echo(f"  Base unit: {base.name} ({base.id})")
    if quote.notes:
        click.echo(f"  Notes: {quote.notes}")
    echo_bill(quote.bill_of_materials)

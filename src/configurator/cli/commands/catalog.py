"""Catalog management commands."""

import click
from configurator.cli.display import echo_component
from configurator.cli.error_handling import handle_domain_error
from configurator.domain.catalog import CatalogService
from configurator.domain.catalog_import import CatalogImportService
from configurator.domain.entities import ComponentCategory
from configurator.domain.errors import DomainError


@click.group()
def catalog_group():
    """Manage the component catalog."""
    pass


@catalog_group.command("import")
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--replace", is_flag=True, help="Remove the existing catalog first")
@click.pass_context
def import_catalog(ctx, directory: str, replace: bool):
    """Import components and rules from a catalog directory.

    The directory must contain components.csv and may contain
    compatibility_rules.csv and pricing_rules.csv.

    Examples:
        configurator catalog import ./catalog
        configurator catalog import ./catalog --replace
    """
    service = CatalogImportService(ctx.obj["db"])

    try:
        result = service.import_catalog(directory, replace=replace)
    except (DomainError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo("\nImport complete:")
    click.echo(f"  Components: {result['components']}")
    click.echo(f"  Compatibility rules: {result['compatibility_rules']}")
    click.echo(f"  Pricing rules: {result['pricing_rules']}")
    click.echo(f"  Skipped: {result['skipped']} duplicates")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


@catalog_group.command("list")
@click.option("--category", help="Only list one category (e.g. 'Motor')")
@click.pass_context
def list_components(ctx, category: str | None):
    """List catalog components grouped by category."""
    service = CatalogService(ctx.obj["db"])

    try:
        components = service.list_components(category)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not components:
        click.echo("No components found.")
        return

    for cat in ComponentCategory:
        in_category = [c for c in components if c.category == cat]
        if not in_category:
            continue
        click.echo(f"\n{cat.value}:")
        for component in in_category:
            echo_component(component)


@catalog_group.command("show")
@click.argument("component_id")
@click.pass_context
def show_component(ctx, component_id: str):
    """Show details of a single component."""
    service = CatalogService(ctx.obj["db"])

    try:
        component = service.get_component(component_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{component.name} ({component.id})")
    click.echo(f"  Category: {component.category.value}")
    click.echo(f"  Part number: {component.part_number}")
    click.echo(f"  Price: {component.price_formatted}")
    if component.description:
        click.echo(f"  Description: {component.description}")
    if component.specifications:
        click.echo("  Specifications:")
        for label, value in sorted(component.specifications.items()):
            click.echo(f"    {label}: {value}")
    if component.compatibility_tags:
        click.echo(f"  Tags: {', '.join(sorted(component.compatibility_tags))}")


def register_commands(cli):
    """Register catalog commands with main CLI."""
    cli.add_command(catalog_group, name="catalog")

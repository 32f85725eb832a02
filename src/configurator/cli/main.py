"""Main CLI entry point."""

import logging

import click
from configurator.database.factories import create_sqlite_database

# Import and register all commands at module level
from configurator.cli.commands import (
    catalog,
    configure,
    quote,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CONFIGURATOR_DB_PATH environment variable)",
    envvar="CONFIGURATOR_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Configurator - Industrial product configuration and quoting.

    Assemble a product from a catalog of compatible components, price the
    bill of materials and keep track of the resulting quotes.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
catalog.register_commands(cli)
configure.register_commands(cli)
quote.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

"""Main CLI entry point."""

import getpass
import logging

import click
from bankrec.database.factories import create_sqlite_database

# Import and register all commands at module level
from bankrec.cli.commands import (
    account,
    directory,
    import_cmd,
    batches,
    reconcile,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _default_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BANKREC_DB_PATH environment variable)",
    envvar="BANKREC_DB_PATH",
)
@click.option(
    "--tenant",
    default="default",
    show_default=True,
    envvar="BANKREC_TENANT",
    help="Tenant whose data is read and written",
)
@click.option(
    "--user",
    default=_default_user,
    envvar="BANKREC_USER",
    help="User recorded as the importer (defaults to the login name)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="BANKREC_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, tenant: str, user: str, log_level: str):
    """Bankrec - bank statement import and reconciliation.

    Import OFX, CSV and Excel statements into bank accounts and reconcile the
    transactions against suppliers, contractors and purchase orders.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["tenant_id"] = tenant
        ctx.obj["user_id"] = user
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
directory.register_commands(cli)
import_cmd.register_commands(cli)
batches.register_commands(cli)
reconcile.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

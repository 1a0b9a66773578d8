"""CLI error handling helpers."""

import logging

import click

from bankrec.domain.errors import DomainError, PersistenceError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error on stderr and exit with status 1.

    Persistence failures are logged with their traceback; the import was
    rolled back, so the command can be retried as is.
    """
    if isinstance(error, PersistenceError):
        logger.error("%s failed and was rolled back", ctx.command_path, exc_info=error)
    else:
        logger.debug("%s rejected: %s", ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)

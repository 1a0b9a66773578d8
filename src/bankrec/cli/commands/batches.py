"""Import batch commands."""

import click
from bankrec.cli.error_handling import handle_domain_error
from bankrec.domain.errors import DomainError
from bankrec.domain.statement_import import StatementImportService


@click.group("batches")
def batches_group():
    """Inspect and delete import batches."""
    pass


@batches_group.command("list")
@click.pass_context
def list_batches(ctx):
    """List import batches, newest first."""
    service = StatementImportService(ctx.obj["db"])
    batches = service.list_batches(ctx.obj["tenant_id"])
    if not batches:
        click.echo("No imports found.")
        return

    for batch in batches:
        click.echo(
            f"ID: {batch.id:3d} | {batch.file_type:4s} | {batch.file_name} | "
            f"{batch.imported_count}/{batch.total_records} imported, "
            f"{batch.duplicate_count} duplicates | "
            f"{batch.period_start} to {batch.period_end} | by {batch.imported_by}"
        )


@batches_group.command("delete")
@click.argument("batch_id", type=int)
@click.confirmation_option(prompt="Delete this import and all of its transactions?")
@click.pass_context
def delete_batch(ctx, batch_id: int):
    """Delete an import batch and all of its transactions."""
    service = StatementImportService(ctx.obj["db"])
    try:
        deleted = service.delete_batch(ctx.obj["tenant_id"], batch_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted import batch {batch_id} ({deleted} transactions)")


def register_commands(cli):
    """Register batch commands with main CLI."""
    cli.add_command(batches_group)

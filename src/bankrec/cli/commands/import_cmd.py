"""Statement import command."""

from pathlib import Path

import click
from bankrec.cli.error_handling import handle_domain_error
from bankrec.domain.errors import DomainError
from bankrec.domain.reconciliation import ReconciliationService
from bankrec.domain.sources import FileByteSource
from bankrec.domain.statement_import import StatementImportService


@click.command("import")
@click.argument("statement_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--account", "bank_account_id", required=True, type=int, help="Bank account ID")
@click.option(
    "--no-reconcile",
    is_flag=True,
    help="Do not run automatic reconciliation on the imported transactions",
)
@click.pass_context
def import_statement(ctx, statement_file: str, bank_account_id: int, no_reconcile: bool):
    """Import an OFX, CSV, XLS or XLSX bank statement."""
    db = ctx.obj["db"]
    tenant_id = ctx.obj["tenant_id"]
    path = Path(statement_file)
    service = StatementImportService(db, source=FileByteSource(str(path.parent)))

    try:
        result = service.import_file(
            tenant_id=tenant_id,
            user_id=ctx.obj["user_id"],
            bank_account_id=bank_account_id,
            file_name=path.name,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:")
    click.echo(f"  Batch: {result.batch_id}")
    click.echo(f"  Records: {result.total_records}")
    click.echo(f"  Imported: {result.imported_count} transactions")
    click.echo(f"  Duplicates: {result.duplicate_count}")
    click.echo(f"  Period: {result.period_start} to {result.period_end}")

    if not no_reconcile:
        matched = ReconciliationService(db).auto_reconcile(tenant_id, result.batch_id)
        click.echo(f"  Auto-matched: {matched}")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_statement)

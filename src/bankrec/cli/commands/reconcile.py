"""Reconciliation commands."""

import click
from bankrec.cli.error_handling import handle_domain_error
from bankrec.domain.entities import EntityType, FinancialTransaction, ReconciliationFilter
from bankrec.domain.entity_search import EntitySearchService
from bankrec.domain.errors import DomainError
from bankrec.domain.reconciliation import ReconciliationService


def _format_transaction(txn: FinancialTransaction) -> str:
    linked = ""
    if txn.reconciliation_status.is_matched:
        linked = f" -> {txn.linked_entity_type} {txn.linked_entity_id} ({txn.linked_entity_name})"
    return (
        f"ID: {txn.id:4d} | {txn.date} | {txn.signed_amount:>12.2f} | "
        f"{txn.reconciliation_status.value:14s} | {txn.description}{linked}"
    )


@click.group("reconcile")
def reconcile_group():
    """Reconcile imported transactions."""
    pass


@reconcile_group.command("list")
@click.option(
    "--status",
    type=click.Choice([f.value for f in ReconciliationFilter], case_sensitive=False),
    default=ReconciliationFilter.ALL.value,
    show_default=True,
)
@click.option("--batch", "batch_id", type=int, help="Only transactions of this import batch")
@click.pass_context
def list_transactions(ctx, status: str, batch_id: int | None):
    """List imported transactions."""
    service = ReconciliationService(ctx.obj["db"])
    transactions = service.list_transactions(
        ctx.obj["tenant_id"], ReconciliationFilter(status.upper()), import_batch_id=batch_id
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    for txn in transactions:
        click.echo(_format_transaction(txn))
    click.echo(f"\n{service.count_pending(ctx.obj['tenant_id'])} pending reconciliation")


@reconcile_group.command("suggest")
@click.argument("transaction_id", type=int)
@click.pass_context
def suggest(ctx, transaction_id: int):
    """Show ranked match suggestions for a transaction."""
    service = ReconciliationService(ctx.obj["db"])
    try:
        suggestions = service.suggestions(ctx.obj["tenant_id"], transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not suggestions:
        click.echo("No suggestions.")
        return

    for s in suggestions:
        click.echo(
            f"{s.confidence:3d}% | {s.entity_type.value:10s} {s.entity_id:4d} | "
            f"{s.entity_name} | {s.reason}"
        )


@reconcile_group.command("match")
@click.argument("transaction_id", type=int)
@click.argument("entity_type", type=click.Choice([t.value for t in EntityType]))
@click.argument("entity_id", type=int)
@click.argument("entity_name")
@click.pass_context
def match(ctx, transaction_id: int, entity_type: str, entity_id: int, entity_name: str):
    """Link a transaction to a supplier, contractor or purchase order."""
    service = ReconciliationService(ctx.obj["db"])
    try:
        txn = service.match(ctx.obj["tenant_id"], transaction_id, entity_type, entity_id, entity_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(_format_transaction(txn))


@reconcile_group.command("unlink")
@click.argument("transaction_id", type=int)
@click.pass_context
def unlink(ctx, transaction_id: int):
    """Return a transaction to PENDING."""
    service = ReconciliationService(ctx.obj["db"])
    try:
        txn = service.unlink(ctx.obj["tenant_id"], transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(_format_transaction(txn))


@reconcile_group.command("ignore")
@click.argument("transaction_id", type=int)
@click.pass_context
def ignore(ctx, transaction_id: int):
    """Exclude a transaction from reconciliation."""
    service = ReconciliationService(ctx.obj["db"])
    try:
        txn = service.ignore(ctx.obj["tenant_id"], transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(_format_transaction(txn))


@reconcile_group.command("rerun")
@click.pass_context
def rerun(ctx):
    """Run automatic matching on every pending transaction."""
    service = ReconciliationService(ctx.obj["db"])
    matched = service.rerun_auto_reconcile(ctx.obj["tenant_id"])
    click.echo(f"Auto-matched {matched} transactions")


@reconcile_group.command("search")
@click.argument("query")
@click.pass_context
def search(ctx, query: str):
    """Search suppliers and contractors by name or document."""
    results = EntitySearchService(ctx.obj["db"]).search(ctx.obj["tenant_id"], query)
    if not results:
        click.echo("No matches.")
        return

    for r in results:
        click.echo(f"{r.entity_type.value:10s} {r.entity_id:4d} | {r.entity_name} | {r.document or '-'}")


def register_commands(cli):
    """Register reconciliation commands with main CLI."""
    cli.add_command(reconcile_group)

"""Commands for seeding the supplier/contractor/purchase order directory.

The directory is owned by other parts of the application; reconciliation only
reads it. These commands exist so a standalone database can be populated.
"""

import click
from bankrec.cli.error_handling import handle_domain_error
from bankrec.domain.entities import PurchaseOrderStatus
from bankrec.utils.amount_parser import parse_brazilian_number
from bankrec.utils.date_parser import parse_brazilian_date


@click.group("directory")
def directory_group():
    """Manage suppliers, contractors, projects and purchase orders."""
    pass


@directory_group.command("add-supplier")
@click.argument("name")
@click.option("--document", help="CNPJ or CPF")
@click.option("--inactive", is_flag=True, help="Create the supplier as inactive")
@click.pass_context
def add_supplier(ctx, name: str, document: str | None, inactive: bool):
    """Add a supplier."""
    supplier_id = ctx.obj["db"].create_supplier(
        ctx.obj["tenant_id"], name, document=document, is_active=not inactive
    )
    click.echo(f"Created supplier '{name}' (ID: {supplier_id})")


@directory_group.command("add-contractor")
@click.argument("name")
@click.option("--document", help="CNPJ or CPF")
@click.option("--inactive", is_flag=True, help="Create the contractor as inactive")
@click.pass_context
def add_contractor(ctx, name: str, document: str | None, inactive: bool):
    """Add a contractor."""
    contractor_id = ctx.obj["db"].create_contractor(
        ctx.obj["tenant_id"], name, document=document, is_active=not inactive
    )
    click.echo(f"Created contractor '{name}' (ID: {contractor_id})")


@directory_group.command("add-project")
@click.argument("name")
@click.pass_context
def add_project(ctx, name: str):
    """Add a project."""
    project_id = ctx.obj["db"].create_project(ctx.obj["tenant_id"], name)
    click.echo(f"Created project '{name}' (ID: {project_id})")


@directory_group.command("add-order")
@click.option("--project", "project_id", required=True, type=int, help="Project ID")
@click.option("--supplier", "supplier_id", required=True, type=int, help="Supplier ID")
@click.option("--number", required=True, help="Order number")
@click.option("--amount", required=True, help="Total amount (e.g. 1.234,56)")
@click.option("--date", "order_date", required=True, help="Order date (DD/MM/YYYY)")
@click.option(
    "--status",
    type=click.Choice([s.value for s in PurchaseOrderStatus]),
    default=PurchaseOrderStatus.APPROVED.value,
    show_default=True,
)
@click.pass_context
def add_order(
    ctx, project_id: int, supplier_id: int, number: str, amount: str, order_date: str, status: str
):
    """Add a purchase order."""
    try:
        total = parse_brazilian_number(amount)
        when = parse_brazilian_date(order_date)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    order_id = ctx.obj["db"].create_purchase_order(
        project_id=project_id,
        supplier_id=supplier_id,
        order_number=number,
        total_amount=total,
        order_date=when,
        status=PurchaseOrderStatus(status),
    )
    click.echo(f"Created purchase order {number} (ID: {order_id})")


@directory_group.command("list")
@click.pass_context
def list_directory(ctx):
    """List suppliers, contractors and projects of the current tenant."""
    db = ctx.obj["db"]
    tenant_id = ctx.obj["tenant_id"]
    parties = db.list_suppliers(tenant_id) + db.list_contractors(tenant_id)
    projects = db.list_projects(tenant_id)
    if not parties and not projects:
        click.echo("No suppliers, contractors or projects found.")
        return

    for party in parties:
        flag = "" if party.is_active else " (inactive)"
        click.echo(
            f"{party.entity_type.value:10s} ID: {party.id:3d} | {party.name:30s} | "
            f"{party.document or '-'}{flag}"
        )
    for project in projects:
        click.echo(f"{'project':10s} ID: {project.id:3d} | {project.name}")


def register_commands(cli):
    """Register directory commands with main CLI."""
    cli.add_command(directory_group)

"""Bank account management commands."""

import click
from bankrec.cli.error_handling import handle_domain_error
from bankrec.domain.account import BankAccountService
from bankrec.domain.errors import DomainError


@click.group("account")
def account_group():
    """Manage bank accounts."""
    pass


@account_group.command("create")
@click.argument("bank_name", metavar="BANK_NAME")
@click.option("--number", help="Account number")
@click.pass_context
def create_account(ctx, bank_name: str, number: str | None):
    """Create a bank account for the current tenant.

    Examples:
        bankrec account create "Banco do Brasil" --number 12345-6
    """
    service = BankAccountService(ctx.obj["db"])

    try:
        account_id = service.create_account(
            tenant_id=ctx.obj["tenant_id"], bank_name=bank_name, account_number=number
        )
        click.echo(f"Created bank account '{bank_name}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List bank accounts of the current tenant."""
    service = BankAccountService(ctx.obj["db"])

    accounts = service.list_accounts(ctx.obj["tenant_id"])
    if not accounts:
        click.echo("No bank accounts found.")
        return

    click.echo("\nBank accounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.bank_name:25s} | Number: {acc.account_number or '-'}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group)

"""Imported account commands."""

import click
from bankroll.cli.account_resolution import resolve_account_or_exit
from bankroll.cli.error_handling import handle_domain_error
from bankroll.cli.formatting import format_money, format_timestamp
from bankroll.domain.account import AccountService
from bankroll.domain.errors import DomainError


@click.group()
def account_group():
    """Browse and clean up imported platform accounts."""
    pass


@account_group.command("list")
@click.option("--with-data", is_flag=True, help="Only accounts that have transactions")
@click.pass_context
def list_accounts(ctx, with_data: bool):
    """List accounts with a summary of their imported history."""
    service = AccountService(ctx.obj["db"])

    summaries = service.list_account_summaries(include_empty=not with_data)
    if not summaries:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 100)
    for summary in summaries:
        click.echo(
            f"ID: {summary.id:3d} | {summary.name:20s} | {summary.platform:15s} | "
            f"{summary.transaction_count:5d} txns | Net: {format_money(summary.real_money_net):>10s} | "
            f"Balance: {format_money(summary.current_balance)}"
        )
        if summary.transaction_count:
            click.echo(
                f"       {format_timestamp(summary.first_transaction)} to "
                f"{format_timestamp(summary.last_transaction)}"
            )


@account_group.command("transactions")
@click.argument("account", metavar="ACCOUNT")
@click.option("--limit", type=int, default=100, show_default=True, help="Maximum rows to show")
@click.pass_context
def list_transactions(ctx, account: str, limit: int):
    """Show an account's transactions, newest first.

    ACCOUNT can be an account name or ID.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        transactions = service.list_transactions(account_id, limit=limit)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    for txn in transactions:
        marker = "*" if txn.is_external else " "
        click.echo(
            f"{marker} {format_timestamp(txn.transaction_date)} | {txn.type:25s} | "
            f"{format_money(txn.amount):>10s} | Balance: {format_money(txn.balance):>10s}"
        )
    click.echo("\n* real-money transaction")


@account_group.command("clear")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def clear_account(ctx, account: str):
    """Delete an account's imported transactions but keep the account.

    ACCOUNT can be an account name or ID.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not click.confirm(f"Delete all transactions of account '{account_obj.name}' (ID: {account_id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        count = service.clear_transactions(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted {count} transaction{'s' if count != 1 else ''} from '{account_obj.name}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def delete_account(ctx, account: str):
    """Delete an account and all of its transactions.

    ACCOUNT can be an account name or ID.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not click.confirm(f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        count = service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}' and {count} transaction{'s' if count != 1 else ''}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")

"""Deposit, withdrawal and history commands."""

import click
from bankledger.cli.commands.account import parse_amount_or_exit
from bankledger.cli.date_filters import resolve_cli_date_range
from bankledger.cli.display import echo_history
from bankledger.cli.error_handling import handle_domain_error
from bankledger.cli.session import ledger_session
from bankledger.utils.date_parser import PERIODS
from bankledger.utils.money import format_money


@click.command("deposit")
@click.argument("account_number", metavar="ACCOUNT_NUMBER")
@click.argument("amount", metavar="AMOUNT")
@click.pass_context
def deposit(ctx, account_number: str, amount: str):
    """Deposit money into an account.

    Examples:
        bankledger deposit ACC1001 5000
        bankledger deposit ACC1001 "1,250.50"
    """
    value = parse_amount_or_exit(ctx, amount, "amount")
    with ledger_session(ctx) as ledger:
        result = ledger.deposit(account_number, value)
        if not result.ok:
            handle_domain_error(ctx, result.error)
        click.echo(
            f"Deposit successful. New Balance: "
            f"{format_money(result.value.balance_after, ctx.obj['symbol'])}"
        )


@click.command("withdraw")
@click.argument("account_number", metavar="ACCOUNT_NUMBER")
@click.argument("amount", metavar="AMOUNT")
@click.pass_context
def withdraw(ctx, account_number: str, amount: str):
    """Withdraw money from an account.

    Savings accounts cannot go below zero; current accounts may go down to
    their overdraft limit.

    Examples:
        bankledger withdraw ACC1001 2500
    """
    value = parse_amount_or_exit(ctx, amount, "amount")
    with ledger_session(ctx) as ledger:
        result = ledger.withdraw(account_number, value)
        if not result.ok:
            handle_domain_error(ctx, result.error)
        click.echo(
            f"Withdrawal successful. New Balance: "
            f"{format_money(result.value.balance_after, ctx.obj['symbol'])}"
        )


@click.command("history")
@click.argument("account_number", metavar="ACCOUNT_NUMBER")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'yesterday')")
@click.option(
    "--period",
    type=click.Choice(PERIODS, case_sensitive=False),
    help="Named period instead of explicit dates",
)
@click.pass_context
def history(ctx, account_number: str, start_date: str | None, end_date: str | None, period: str | None):
    """Show an account's transaction history.

    Examples:
        bankledger history ACC1001
        bankledger history ACC1001 --period this-month
        bankledger history ACC1001 --start-date 2024-01-01 --end-date 2024-03-31
    """
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    with ledger_session(ctx, save=False) as ledger:
        result = ledger.history(account_number, start_date=start, end_date=end)
        if not result.ok:
            handle_domain_error(ctx, result.error)
        echo_history(ledger.find_account(account_number), result.value, ctx.obj["symbol"])


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(deposit)
    cli.add_command(withdraw)
    cli.add_command(history)

"""Rendering of accounts and transactions for terminal output."""

import click

from bankledger.domain.account import Account
from bankledger.domain.entities import SavingsTerms, Transaction
from bankledger.utils.money import format_money

RULE = "-" * 62


def describe_terms(account: Account, symbol: str) -> str:
    """Return the variant parameter as shown in listings."""
    if isinstance(account.terms, SavingsTerms):
        return f"{account.terms.interest_rate_percent}% interest"
    return f"{format_money(account.terms.overdraft_limit, symbol)} overdraft"


def account_line(account: Account, symbol: str) -> str:
    """Return a one-line summary of an account."""
    return (
        f"{account.account_number:<10s} | {account.holder_name:<15s} | "
        f"{account.kind.value.title():<7s} | Balance: {format_money(account.balance, symbol)}"
    )


def echo_accounts(accounts: list[Account], symbol: str) -> None:
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nBank Accounts:")
    click.echo(RULE)
    for account in accounts:
        click.echo(account_line(account, symbol))


def echo_history(account: Account, transactions: list[Transaction], symbol: str) -> None:
    click.echo(f"\nTransaction History - {account.holder_name} ({account.account_number})")
    click.echo(RULE)
    if not transactions:
        click.echo("No transactions in this period.")
        return
    for txn in transactions:
        click.echo(txn.render(symbol))

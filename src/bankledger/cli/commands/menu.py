"""Interactive numbered menu over a single ledger session."""

from decimal import Decimal
from typing import Callable

import click
from bankledger.cli.display import echo_accounts, echo_history
from bankledger.cli.error_handling import echo_error
from bankledger.cli.session import load_ledger, save_ledger
from bankledger.domain.entities import AccountKind, AccountSpec
from bankledger.domain.ledger import Ledger
from bankledger.utils.amount_parser import parse_amount
from bankledger.utils.money import format_money

MENU_RULE = "=" * 45


def _amount(text: str) -> Decimal:
    """Prompt value processor: re-ask until the input parses as an amount."""
    try:
        return parse_amount(text)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _prompt_account_details() -> AccountSpec:
    name = click.prompt("Holder Name")
    balance = click.prompt("Initial Balance", value_proc=_amount)
    tag = click.prompt("Type (S for Savings / C for Current)")
    try:
        kind = AccountKind.parse(tag)
    except ValueError:
        # Left for the ledger to reject
        return AccountSpec(kind=tag, holder_name=name, initial_balance=balance)

    if kind is AccountKind.SAVINGS:
        param = click.prompt("Interest Rate (%)", value_proc=_amount)
    else:
        param = click.prompt("Overdraft Limit", value_proc=_amount)
    return AccountSpec(kind=kind, holder_name=name, initial_balance=balance, variant_param=param)


def create_single(ledger: Ledger, symbol: str) -> None:
    spec = _prompt_account_details()
    account = ledger.create_account(
        spec.kind, spec.holder_name, spec.initial_balance, spec.variant_param
    ).unwrap()
    click.echo(f"{account.kind.value.title()} Account Created: {account.account_number}")


def create_batch(ledger: Ledger, symbol: str) -> None:
    count = click.prompt(
        "How many accounts do you want to create?", type=click.IntRange(min=1)
    )
    specs = []
    for i in range(1, count + 1):
        click.echo(f"\nEnter details for User {i}:")
        specs.append(_prompt_account_details())

    batch = ledger.create_accounts_batch(specs)
    for account in batch.created:
        click.echo(f"{account.kind.value.title()} Account Created: {account.account_number}")
    for failure in batch.failures:
        echo_error(failure.error)
    click.echo(f"Created {len(batch.created)} of {len(specs)} account(s).")


def deposit(ledger: Ledger, symbol: str) -> None:
    number = click.prompt("Account Number")
    ledger.require_account(number).unwrap()
    amount = click.prompt("Deposit Amount", value_proc=_amount)
    txn = ledger.deposit(number, amount).unwrap()
    click.echo(f"Deposit successful. New Balance: {format_money(txn.balance_after, symbol)}")


def withdraw(ledger: Ledger, symbol: str) -> None:
    number = click.prompt("Account Number")
    ledger.require_account(number).unwrap()
    amount = click.prompt("Withdraw Amount", value_proc=_amount)
    txn = ledger.withdraw(number, amount).unwrap()
    click.echo(f"Withdrawal successful. New Balance: {format_money(txn.balance_after, symbol)}")


def check_balance(ledger: Ledger, symbol: str) -> None:
    number = click.prompt("Account Number")
    balance = ledger.balance(number).unwrap()
    click.echo(f"Balance: {format_money(balance, symbol)}")


def show_history(ledger: Ledger, symbol: str) -> None:
    number = click.prompt("Account Number")
    transactions = ledger.history(number).unwrap()
    echo_history(ledger.find_account(number), transactions, symbol)


def apply_interest(ledger: Ledger, symbol: str) -> None:
    applied = ledger.apply_interest_to_all()
    click.echo(f"Interest applied to {len(applied)} savings account(s).")


def list_all(ledger: Ledger, symbol: str) -> None:
    echo_accounts(list(ledger.list_accounts()), symbol)


def delete(ledger: Ledger, symbol: str) -> None:
    number = click.prompt("Enter Account Number to delete")
    account = ledger.find_account(number)
    if ledger.delete_account(number):
        click.echo(f"Account {number} ({account.holder_name}) deleted successfully.")
    else:
        click.echo("Account not found!")


MENU: dict[int, tuple[str, Callable[[Ledger, str], None]]] = {
    1: ("Open New Account", create_single),
    2: ("Open Several Accounts", create_batch),
    3: ("Deposit", deposit),
    4: ("Withdraw", withdraw),
    5: ("Check Balance", check_balance),
    6: ("Transaction History", show_history),
    7: ("Apply Interest to Savings", apply_interest),
    8: ("Show All Accounts", list_all),
    9: ("Delete an Account", delete),
}


def run_menu(ledger: Ledger, symbol: str) -> None:
    """Prompt for actions until the user chooses exit.

    A failed action prints its error and the loop carries on.
    """
    while True:
        click.echo(f"\n{'BANK MENU':=^45}")
        for number, (label, _) in MENU.items():
            click.echo(f"{number}. {label}")
        click.echo("0. Exit")
        click.echo(MENU_RULE)

        choice = click.prompt("Enter choice", type=int)
        if choice == 0:
            return

        entry = MENU.get(choice)
        if entry is None:
            click.echo("Invalid choice!")
            continue

        try:
            entry[1](ledger, symbol)
        except ValueError as e:
            echo_error(e)


@click.command("menu")
@click.pass_context
def menu(ctx):
    """Run the interactive menu.

    The ledger is saved on exit, and also if the session ends abnormally
    (end of input or Ctrl-C).
    """
    ledger = load_ledger(ctx)
    try:
        run_menu(ledger, ctx.obj["symbol"])
    finally:
        if save_ledger(ledger):
            click.echo("Data saved successfully.")
    click.echo("Goodbye! Thank you for using our bank.")


def register_commands(cli):
    """Register menu command with main CLI."""
    cli.add_command(menu)

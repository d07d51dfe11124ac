"""Account management commands."""

import click
from bankledger.cli.display import account_line, describe_terms, echo_accounts
from bankledger.cli.error_handling import handle_domain_error
from bankledger.cli.session import ledger_session
from bankledger.domain.batch_import import read_account_specs
from bankledger.domain.entities import AccountKind
from bankledger.utils.amount_parser import parse_amount
from bankledger.utils.money import format_money


def parse_amount_or_exit(ctx: click.Context, value: str, label: str):
    """Parse an amount option, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.command("create")
@click.option(
    "--type",
    "account_type",
    required=True,
    help="Account type: S (savings) or C (current)",
)
@click.option("--name", required=True, help="Account holder name")
@click.option("--balance", default="0", show_default=True, help="Opening balance")
@click.option("--rate", help="Monthly interest rate in percent (savings)")
@click.option("--overdraft", help="Overdraft limit (current)")
@click.pass_context
def create_account(
    ctx,
    account_type: str,
    name: str,
    balance: str,
    rate: str | None,
    overdraft: str | None,
):
    """Open a new account.

    Examples:
        bankledger create --type S --name "Asha Rao" --balance 10000 --rate 5
        bankledger create --type C --name "Ravi Traders" --overdraft 500
    """
    symbol = ctx.obj["symbol"]
    opening = parse_amount_or_exit(ctx, balance, "balance")

    try:
        kind = AccountKind.parse(account_type)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if kind is AccountKind.SAVINGS:
        raw_param, label, other_option, other_value = rate, "interest rate", "--overdraft", overdraft
    else:
        raw_param, label, other_option, other_value = overdraft, "overdraft limit", "--rate", rate
    if other_value is not None:
        click.echo(f"Error: {other_option} does not apply to {kind.value} accounts", err=True)
        ctx.exit(1)

    param = None
    if raw_param is not None:
        param = parse_amount_or_exit(ctx, raw_param, label)

    with ledger_session(ctx) as ledger:
        result = ledger.create_account(kind, name, opening, param)
        if not result.ok:
            handle_domain_error(ctx, result.error)
        account = result.value
        click.echo(f"Created {kind.value} account {account.account_number} for {account.holder_name}")
        click.echo(f"  Opening balance: {format_money(account.balance, symbol)}")
        click.echo(f"  Terms: {describe_terms(account, symbol)}")


@click.command("create-batch")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def create_batch(ctx, csv_file: str):
    """Open several accounts from a CSV file.

    The file needs the columns type, name and balance, and optionally
    param (interest rate for savings, overdraft limit for current).
    Rows that fail are reported and skipped; the rest are created.

    Examples:
        bankledger create-batch new_accounts.csv
    """
    try:
        spec_file = read_account_specs(csv_file)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    for message in spec_file.errors:
        click.echo(f"Skipped: {message}", err=True)

    with ledger_session(ctx) as ledger:
        batch = ledger.create_accounts_batch(spec_file.specs)

    for account in batch.created:
        click.echo(f"Created {account.kind.value} account {account.account_number} for {account.holder_name}")
    for failure in batch.failures:
        click.echo(
            f"Skipped: item {failure.index + 1} ({failure.spec.holder_name}): {failure.error}",
            err=True,
        )

    skipped = len(batch.failures) + len(spec_file.errors)
    click.echo(f"\nCreated {len(batch.created)} account(s), skipped {skipped}")


@click.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    with ledger_session(ctx, save=False) as ledger:
        echo_accounts(list(ledger.list_accounts()), ctx.obj["symbol"])


@click.command("balance")
@click.argument("account_number", metavar="ACCOUNT_NUMBER")
@click.pass_context
def show_balance(ctx, account_number: str):
    """Show an account's current balance."""
    with ledger_session(ctx, save=False) as ledger:
        result = ledger.require_account(account_number)
        if not result.ok:
            handle_domain_error(ctx, result.error)
        click.echo(account_line(result.value, ctx.obj["symbol"]))


@click.command("delete")
@click.argument("account_number", metavar="ACCOUNT_NUMBER")
@click.option("--yes", "-y", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_account(ctx, account_number: str, yes: bool) -> None:
    """Delete an account and its transaction history.

    The account number is never reused.

    Examples:
        bankledger delete ACC1002
        bankledger delete ACC1002 --yes
    """
    with ledger_session(ctx) as ledger:
        account = ledger.find_account(account_number)
        if account is None:
            click.echo(f"Error: Account {account_number} not found", err=True)
            ctx.exit(1)

        # Confirm deletion
        if not yes and not click.confirm(
            f"Are you sure you want to delete account {account_number} ({account.holder_name})?"
        ):
            click.echo("Deletion cancelled.")
            return

        ledger.delete_account(account_number)
        click.echo(f"Deleted account {account_number} ({account.holder_name})")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(create_account)
    cli.add_command(create_batch)
    cli.add_command(list_accounts)
    cli.add_command(show_balance)
    cli.add_command(delete_account)

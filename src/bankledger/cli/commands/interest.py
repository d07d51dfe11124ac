"""Interest accrual command."""

from decimal import Decimal

import click
from bankledger.cli.session import ledger_session
from bankledger.utils.money import format_money


@click.command("apply-interest")
@click.pass_context
def apply_interest(ctx):
    """Apply one month of interest to every savings account.

    Current accounts earn no interest and are left unchanged.
    """
    symbol = ctx.obj["symbol"]
    with ledger_session(ctx) as ledger:
        applied = ledger.apply_interest_to_all()

    if not applied:
        click.echo("No savings accounts to credit.")
        return

    total = sum((txn.amount for txn in applied), Decimal(0))
    click.echo(
        f"Interest applied to {len(applied)} savings account(s), "
        f"total credited {format_money(total, symbol)}"
    )


def register_commands(cli):
    """Register interest command with main CLI."""
    cli.add_command(apply_interest)

"""Main CLI entry point."""

import click
from bankledger.database.factories import create_sqlite_store
from bankledger.logging_config import setup_logging, LOG_LEVEL_ENV_VAR
from bankledger.utils.money import DEFAULT_CURRENCY_SYMBOL

# Import and register all commands at module level
from bankledger.cli.commands import (
    account,
    transaction,
    interest,
    snapshot,
    menu,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BANKLEDGER_DB_PATH environment variable)",
    envvar="BANKLEDGER_DB_PATH",
)
@click.option(
    "--currency-symbol",
    default=DEFAULT_CURRENCY_SYMBOL,
    show_default=True,
    envvar="BANKLEDGER_CURRENCY_SYMBOL",
    help="Symbol used when displaying amounts",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar=LOG_LEVEL_ENV_VAR,
    help="Verbosity of the JSON log written to stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, currency_symbol: str, log_level: str):
    """Bankledger - savings and current account ledger.

    Open accounts, record deposits and withdrawals, accrue monthly interest
    and review transaction history. State is kept in a local SQLite file.
    """
    ctx.ensure_object(dict)
    ctx.obj["symbol"] = currency_symbol

    # Initialize the store only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        setup_logging(log_level)
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        ctx.obj["store"] = store
        ctx.call_on_close(store.disconnect)


# Register all commands
account.register_commands(cli)
transaction.register_commands(cli)
interest.register_commands(cli)
snapshot.register_commands(cli)
menu.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

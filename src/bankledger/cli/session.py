"""Ledger lifecycle for CLI commands: load on entry, save on exit."""

from contextlib import contextmanager
from typing import Iterator

import click

from bankledger.domain.ledger import Ledger


def load_ledger(ctx: click.Context) -> Ledger:
    """Build a ledger from the configured store, warning if the data is unreadable."""
    ledger = Ledger(ctx.obj["store"])
    loaded = ledger.load_snapshot()
    if not loaded.ok:
        click.echo(f"Warning: {loaded.error}. Starting with an empty ledger.", err=True)
    return ledger


def save_ledger(ledger: Ledger) -> bool:
    """Persist the ledger, reporting a failure without raising."""
    saved = ledger.save_snapshot()
    if not saved.ok:
        click.echo(f"Error: {saved.error}", err=True)
    return saved.ok


@contextmanager
def ledger_session(ctx: click.Context, save: bool = True) -> Iterator[Ledger]:
    """Open the ledger for one command.

    With ``save`` the ledger is written back when the block exits, also
    when it exits through an exception such as ``ctx.exit``.
    """
    ledger = load_ledger(ctx)
    try:
        yield ledger
    finally:
        if save:
            save_ledger(ledger)

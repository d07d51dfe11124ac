"""Snapshot export and import commands."""

from pathlib import Path

import click
from bankledger.cli.error_handling import handle_domain_error
from bankledger.cli.session import ledger_session
from bankledger.database import codec
from bankledger.domain.errors import PersistenceError


@click.command("export")
@click.argument("json_file", type=click.Path(dir_okay=False, writable=True))
@click.pass_context
def export_snapshot(ctx, json_file: str):
    """Write the whole ledger to a JSON file.

    Examples:
        bankledger export backup.json
    """
    with ledger_session(ctx, save=False) as ledger:
        snapshot = ledger.snapshot()

    try:
        Path(json_file).write_text(codec.dumps(snapshot), encoding="utf-8")
    except OSError as e:
        click.echo(f"Error: Could not write {json_file}: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Exported {len(snapshot.accounts)} account(s) to {json_file}")


@click.command("import")
@click.argument("json_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", "-y", is_flag=True, help="Replace without asking for confirmation")
@click.pass_context
def import_snapshot(ctx, json_file: str, yes: bool):
    """Replace the ledger with the contents of a JSON export.

    Examples:
        bankledger import backup.json
    """
    try:
        snapshot = codec.loads(Path(json_file).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Error: Could not read {json_file}: {e}", err=True)
        ctx.exit(1)
    except PersistenceError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Replace all current accounts with {len(snapshot.accounts)} account(s) from {json_file}?"
    ):
        click.echo("Import cancelled.")
        return

    with ledger_session(ctx) as ledger:
        try:
            ledger.restore(snapshot)
        except PersistenceError as e:
            handle_domain_error(ctx, e)
    click.echo(f"Imported {len(snapshot.accounts)} account(s) from {json_file}")


def register_commands(cli):
    """Register snapshot commands with main CLI."""
    cli.add_command(export_snapshot)
    cli.add_command(import_snapshot)

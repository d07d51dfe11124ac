"""CLI error handling helpers."""

import click

from bankledger.domain.errors import DomainError


def echo_error(error: DomainError | ValueError) -> None:
    """Render a domain error on stderr."""
    click.echo(f"Error: {error}", err=True)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    echo_error(error)
    ctx.exit(1)

"""CLI error handling helpers."""

from typing import Optional

import click

from minibank.domain.errors import DomainError


def report_error(error: DomainError | ValueError, location: Optional[str] = None) -> None:
    """Print a rejected operation to stderr, prefixed with where it happened."""
    prefix = f"{location}: " if location else ""
    click.echo(f"{prefix}Error: {error}", err=True)


def handle_domain_error(
    ctx: click.Context, error: DomainError | ValueError, location: Optional[str] = None
) -> None:
    """Render a domain error and exit with failure."""
    report_error(error, location)
    ctx.exit(1)

"""CLI error handling helpers."""

import click

from yardroute.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def echo_errors(errors: list[str]) -> None:
    """Print a batch result's error strings to stderr."""
    if errors:
        click.echo(f"  Errors: {len(errors)}")
        for error in errors:
            click.echo(f"    {error}", err=True)

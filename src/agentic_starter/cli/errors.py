"""CLI error reporting."""

from typing import NoReturn

import click

from agentic_starter.errors import StarterError


def exit_with_error(error: StarterError) -> NoReturn:
    """Print a red error line to stderr and exit with code 1."""
    click.echo(click.style("Error: ", fg="red") + error.message, err=True)
    raise SystemExit(1)

"""User-facing output. Everything goes to stderr; stdout is kept for data."""

import click


def user_output(message: str = "") -> None:
    click.echo(message, err=True)

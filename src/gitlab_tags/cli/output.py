"""Output helpers separating human-readable messages from data.

user_output goes to stderr so that machine_output on stdout can be piped.
"""

import click


def user_output(message: str = "") -> None:
    """Print a message for the user (stderr)."""
    click.echo(message, err=True)


def machine_output(message: str = "") -> None:
    """Print data meant for scripts and pipes (stdout)."""
    click.echo(message)

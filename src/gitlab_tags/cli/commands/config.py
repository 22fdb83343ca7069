"""Configuration commands."""

from dataclasses import asdict

import click

from gitlab_tags.cli.ensure import Ensure, fail
from gitlab_tags.cli.output import machine_output, user_output
from gitlab_tags.core.config import get_config_keys
from gitlab_tags.core.context import GitLabContext


def _display_value(key: str, value: object) -> str:
    if value is None:
        return "(not set)"
    if key == "token":
        # Never echo secrets
        return "********"
    return str(value)


@click.group("config")
def config_group() -> None:
    """Manage gltags configuration."""


@config_group.command("list")
@click.pass_obj
def config_list(ctx: GitLabContext) -> None:
    """Show effective configuration (file plus environment overrides)."""
    user_output(click.style(f"Config file: {ctx.config_store.config_path()}", dim=True))
    values = asdict(ctx.global_config)
    for key in get_config_keys():
        machine_output(f"{key}={_display_value(key, values[key])}")


@config_group.command("keys")
def config_keys() -> None:
    """List available configuration keys with descriptions."""
    for key, description in get_config_keys().items():
        machine_output(f"{key}\t{description}")


@config_group.command("get")
@click.argument("key")
@click.pass_obj
def config_get(ctx: GitLabContext, key: str) -> None:
    """Print the effective value of KEY."""
    Ensure.invariant(key in get_config_keys(), f"Unknown config key: {key}")
    value = asdict(ctx.global_config)[key]
    Ensure.invariant(value is not None, f"Key not set: {key}")
    machine_output(str(value))


@config_group.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def config_set(ctx: GitLabContext, key: str, value: str) -> None:
    """Write KEY=VALUE to the config file."""
    try:
        ctx.config_store.set_value(key, value)
    except ValueError as e:
        fail(str(e))
    user_output(f"Set {key} in {ctx.config_store.config_path()}")

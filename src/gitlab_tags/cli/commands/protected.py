"""Protected tag commands."""

import click

from gitlab_tags.cli.ensure import Ensure, api_errors
from gitlab_tags.cli.output import machine_output, user_output
from gitlab_tags.core.context import GitLabContext
from gitlab_tags.gateway.gitlab.types import AccessLevel, ProtectedTag, ProtectedTagAccessLevel

# Roles that can be granted tag creation
ACCESS_LEVEL_CHOICES = ["no-one", "developer", "maintainer", "owner", "admin"]


def parse_access_level(value: str) -> AccessLevel:
    if value == "no-one":
        return AccessLevel.NONE
    return AccessLevel[value.upper()]


def describe_access_level(level: ProtectedTagAccessLevel) -> str:
    if level.access_level_description:
        return level.access_level_description
    if level.access_level is not None:
        return level.access_level.name.lower()
    if level.user_id is not None:
        return f"user {level.user_id}"
    if level.group_id is not None:
        return f"group {level.group_id}"
    if level.deploy_key_id is not None:
        return f"deploy key {level.deploy_key_id}"
    return "unknown"


def format_protected_tag(rule: ProtectedTag) -> str:
    levels = ", ".join(describe_access_level(level) for level in rule.create_access_levels)
    return f"{rule.name}\t{levels or '-'}"


@click.group("protected")
def protected_group() -> None:
    """Manage protected tag rules."""


@protected_group.command("list")
@click.pass_obj
def list_protected(ctx: GitLabContext) -> None:
    """List protection rules of the project."""
    project = Ensure.project(ctx)
    gitlab = Ensure.gitlab(ctx)

    with api_errors():
        rules = gitlab.tags.get_protected_tags(project)
    for rule in rules:
        machine_output(format_protected_tag(rule))


@protected_group.command("show")
@click.argument("name")
@click.pass_obj
def show_protected(ctx: GitLabContext, name: str) -> None:
    """Show the protection rule NAME."""
    project = Ensure.project(ctx)
    gitlab = Ensure.gitlab(ctx)

    with api_errors():
        rule = gitlab.tags.get_optional_protected_tag(project, name)
    Ensure.invariant(rule is not None, f"No protection rule '{name}' in {project}")
    assert rule is not None
    machine_output(format_protected_tag(rule))


@protected_group.command("add")
@click.argument("name")
@click.option(
    "--access-level",
    type=click.Choice(ACCESS_LEVEL_CHOICES),
    default="maintainer",
    show_default=True,
    help="Lowest role allowed to create matching tags",
)
@click.pass_obj
def add_protected(ctx: GitLabContext, name: str, access_level: str) -> None:
    """Protect tags matching NAME (wildcards like 'release-*' allowed)."""
    project = Ensure.project(ctx)
    gitlab = Ensure.gitlab(ctx)

    with api_errors():
        rule = gitlab.tags.protect_tag(project, name, parse_access_level(access_level))
    user_output(click.style("✓ ", fg="green") + f"Protected {rule.name}")


@protected_group.command("remove")
@click.argument("name")
@click.pass_obj
def remove_protected(ctx: GitLabContext, name: str) -> None:
    """Remove the protection rule NAME. Matching tags are kept."""
    project = Ensure.project(ctx)
    gitlab = Ensure.gitlab(ctx)

    with api_errors():
        gitlab.tags.unprotect_tag(project, name)
    user_output(click.style("✓ ", fg="green") + f"Unprotected {name}")

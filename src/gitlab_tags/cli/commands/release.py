"""Release notes commands for tags."""

import click

from gitlab_tags.cli.ensure import Ensure, api_errors
from gitlab_tags.cli.output import user_output
from gitlab_tags.core.context import GitLabContext


@click.group("release")
def release_group() -> None:
    """Manage release notes attached to tags."""


@release_group.command("create")
@click.argument("tag_name")
@click.argument("description")
@click.pass_obj
def create_release(ctx: GitLabContext, tag_name: str, description: str) -> None:
    """Attach release notes DESCRIPTION to TAG_NAME."""
    project = Ensure.project(ctx)
    gitlab = Ensure.gitlab(ctx)

    with api_errors():
        gitlab.tags.create_release(project, tag_name, description)
    user_output(click.style("✓ ", fg="green") + f"Created release for {tag_name}")


@release_group.command("update")
@click.argument("tag_name")
@click.argument("description")
@click.pass_obj
def update_release(ctx: GitLabContext, tag_name: str, description: str) -> None:
    """Replace the release notes of TAG_NAME."""
    project = Ensure.project(ctx)
    gitlab = Ensure.gitlab(ctx)

    with api_errors():
        gitlab.tags.update_release(project, tag_name, description)
    user_output(click.style("✓ ", fg="green") + f"Updated release for {tag_name}")

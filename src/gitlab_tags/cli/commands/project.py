"""Project commands."""

import click

from gitlab_tags.cli.ensure import Ensure, api_errors
from gitlab_tags.cli.output import machine_output
from gitlab_tags.core.context import GitLabContext


@click.group("project")
def project_group() -> None:
    """Inspect the configured project."""


@project_group.command("show")
@click.pass_obj
def show_project(ctx: GitLabContext) -> None:
    """Show the project tag commands operate on."""
    project_ref = Ensure.project(ctx)
    gitlab = Ensure.gitlab(ctx)

    with api_errors():
        project = gitlab.projects.get_optional_project(project_ref)
    Ensure.invariant(project is not None, f"Project '{project_ref}' not found")
    assert project is not None

    machine_output(f"id: {project.id}")
    machine_output(f"path: {project.path_with_namespace}")
    if project.default_branch is not None:
        machine_output(f"default_branch: {project.default_branch}")
    if project.web_url is not None:
        machine_output(f"web_url: {project.web_url}")

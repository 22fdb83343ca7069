import logging
from dataclasses import replace

import click

from gitlab_tags.cli.commands.config import config_group
from gitlab_tags.cli.commands.project import project_group
from gitlab_tags.cli.commands.protected import protected_group
from gitlab_tags.cli.commands.release import release_group
from gitlab_tags.cli.commands.tag import tag_group
from gitlab_tags.cli.ensure import fail
from gitlab_tags.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="gitlab-tags")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--project",
    "-p",
    help="Project id or namespace/path (default: default_project from config)",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, project: str | None) -> None:
    """Manage GitLab repository tags, releases and protected tags."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context(project_override=project)
        except ValueError as e:
            fail(str(e))
    elif project is not None:
        ctx.obj = replace(ctx.obj, project_override=project)


cli.add_command(config_group)
cli.add_command(project_group)
cli.add_command(protected_group)
cli.add_command(release_group)
cli.add_command(tag_group)

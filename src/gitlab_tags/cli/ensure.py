"""CLI error handling for preconditions and GitLab API failures.

Each helper either returns a usable value or prints a red "Error:" line and
exits with code 1. Commands never show tracebacks for expected failures.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn

import click

from gitlab_tags.cli.output import user_output
from gitlab_tags.core.context import GitLabContext
from gitlab_tags.gateway.gitlab.errors import GitLabApiError
from gitlab_tags.gateway.gitlab.gateway import GitLabGateway


def fail(message: str) -> NoReturn:
    """Print an error and exit with code 1."""
    user_output(click.style("Error: ", fg="red") + message)
    raise SystemExit(1)


class Ensure:
    """Helpers for narrowing CLI state to what a command needs."""

    @staticmethod
    def invariant(condition: bool, message: str) -> None:
        if not condition:
            fail(message)

    @staticmethod
    def project(ctx: GitLabContext) -> str:
        """Project from --project or default_project, or exit."""
        project = (ctx.project or "").strip()
        if not project:
            fail(
                "No project given. Pass --project or run "
                "'gltags config set default_project <namespace/path>'"
            )
        return project

    @staticmethod
    def gitlab(ctx: GitLabContext) -> GitLabGateway:
        """Gateway for the configured instance, or exit if no token is available."""
        try:
            return ctx.gitlab
        except (RuntimeError, ValueError) as e:
            fail(str(e))


@contextmanager
def api_errors() -> Iterator[None]:
    """Report GitLabApiError as a CLI error instead of a traceback."""
    try:
        yield
    except GitLabApiError as e:
        fail(str(e))

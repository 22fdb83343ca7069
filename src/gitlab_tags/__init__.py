"""gltags CLI entry point.

This package provides a client for the tag endpoints of the GitLab REST API
(tags, releases on tags, protected tags) and a Click-based CLI on top of it.
See `gltags --help` for details.
"""

from gitlab_tags.cli.cli import cli


def main() -> None:
    """CLI entry point used by the `gltags` console script."""
    cli()

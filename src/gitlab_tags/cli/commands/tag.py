"""Repository tag commands: list, show, create, delete."""

import click

from gitlab_tags.cli.ensure import Ensure, api_errors
from gitlab_tags.cli.output import machine_output, user_output
from gitlab_tags.core.context import GitLabContext
from gitlab_tags.gateway.gitlab.types import Tag


def format_tag_line(tag: Tag) -> str:
    """One-line summary: name, short commit id and markers."""
    short_id = tag.commit.short_id if tag.commit is not None else "-"
    markers = []
    if tag.protected:
        markers.append("protected")
    if tag.release is not None:
        markers.append("release")
    suffix = f"  [{', '.join(markers)}]" if markers else ""
    return f"{tag.name}\t{short_id}{suffix}"


@click.group("tag")
def tag_group() -> None:
    """Manage repository tags."""


@tag_group.command("list")
@click.option(
    "--order-by", type=click.Choice(["name", "updated", "version"]), help="Sort field"
)
@click.option("--sort", type=click.Choice(["asc", "desc"]), help="Sort direction")
@click.option("--search", help="Only tags containing this text (^prefix / suffix$)")
@click.option("--per-page", type=click.IntRange(1, 100), help="Fetch a single page of N tags")
@click.pass_obj
def list_tags(
    ctx: GitLabContext,
    order_by: str | None,
    sort: str | None,
    search: str | None,
    per_page: int | None,
) -> None:
    """List tags of the project."""
    project = Ensure.project(ctx)
    gitlab = Ensure.gitlab(ctx)

    with api_errors():
        if per_page is None:
            tags = gitlab.tags.get_tags(project, order_by=order_by, sort=sort, search=search)
        else:
            pager = gitlab.tags.get_tags_pager(
                project, per_page, order_by=order_by, sort=sort, search=search
            )
            tags = pager.first()
            total = pager.total_items if pager.total_items is not None else "unknown"
            user_output(f"Showing {len(tags)} of {total} tags")

    for tag in tags:
        machine_output(format_tag_line(tag))


@tag_group.command("show")
@click.argument("name")
@click.pass_obj
def show_tag(ctx: GitLabContext, name: str) -> None:
    """Show a single tag."""
    project = Ensure.project(ctx)
    gitlab = Ensure.gitlab(ctx)

    with api_errors():
        tag = gitlab.tags.get_optional_tag(project, name)
    Ensure.invariant(tag is not None, f"Tag '{name}' not found in {project}")
    assert tag is not None

    machine_output(f"name: {tag.name}")
    if tag.commit is not None:
        machine_output(f"commit: {tag.commit.id}")
        machine_output(f"title: {tag.commit.title}")
    if tag.message:
        machine_output(f"message: {tag.message}")
    machine_output(f"protected: {str(tag.protected).lower()}")
    if tag.release is not None:
        machine_output("release:")
        machine_output(tag.release.description or "")


@tag_group.command("create")
@click.argument("name")
@click.option("--ref", required=True, help="Branch, tag or commit SHA to tag")
@click.option("--message", "-m", help="Annotation message (creates an annotated tag)")
@click.option("--release-notes", help="Release notes to attach to the new tag")
@click.pass_obj
def create_tag(
    ctx: GitLabContext, name: str, ref: str, message: str | None, release_notes: str | None
) -> None:
    """Create a tag at REF."""
    project = Ensure.project(ctx)
    gitlab = Ensure.gitlab(ctx)

    with api_errors():
        tag = gitlab.tags.create_tag(
            project, name, ref, message=message, release_description=release_notes
        )
    user_output(click.style("✓ ", fg="green") + f"Created tag {tag.name}")
    machine_output(format_tag_line(tag))


@tag_group.command("delete")
@click.argument("name")
@click.option("--missing-ok", is_flag=True, help="Succeed if the tag does not exist")
@click.pass_obj
def delete_tag(ctx: GitLabContext, name: str, missing_ok: bool) -> None:
    """Delete a tag. Its release is deleted with it; protection rules are kept."""
    project = Ensure.project(ctx)
    gitlab = Ensure.gitlab(ctx)

    with api_errors():
        if missing_ok and gitlab.tags.get_optional_tag(project, name) is None:
            user_output(f"Tag {name} does not exist, nothing to delete")
            return
        gitlab.tags.delete_tag(project, name)
    user_output(click.style("✓ ", fg="green") + f"Deleted tag {name}")

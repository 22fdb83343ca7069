"""Composite gateway for GitLab operations."""

from dataclasses import dataclass

from gitlab_tags.gateway.gitlab.projects.abc import ProjectsGateway
from gitlab_tags.gateway.gitlab.tags.abc import TagsGateway
from gitlab_tags.gateway.http.abc import HttpClient


@dataclass(frozen=True)
class GitLabGateway:
    """Composite gateway providing access to the GitLab sub-gateways.

    Usage:
        ctx.gitlab.tags.create_tag(project, "v1.0.0", "main")
        ctx.gitlab.tags.protect_tag(project, "release-*", AccessLevel.MAINTAINER)
        ctx.gitlab.projects.get_project("group/project")
    """

    tags: TagsGateway
    projects: ProjectsGateway


def create_real_gitlab_gateway(http_client: HttpClient, *, per_page: int) -> GitLabGateway:
    """Create a GitLabGateway whose sub-gateways share one HTTP client.

    Args:
        http_client: Client for the GitLab API
        per_page: Page size used when walking full listings
    """
    from gitlab_tags.gateway.gitlab.projects.real import RealProjectsGateway
    from gitlab_tags.gateway.gitlab.tags.real import RealTagsGateway

    return GitLabGateway(
        tags=RealTagsGateway(http_client, per_page=per_page),
        projects=RealProjectsGateway(http_client),
    )


def create_fake_gitlab_gateway(
    *,
    tags: TagsGateway | None = None,
    projects: ProjectsGateway | None = None,
) -> GitLabGateway:
    """Create a GitLabGateway with fake sub-gateways for testing.

    Provide custom sub-gateways to override the defaults.

    Example:
        >>> tags = FakeTagsGateway(tags={42: [Tag(name="v1.0.0")]})
        >>> gitlab = create_fake_gitlab_gateway(tags=tags)
        >>> # Later: assert tags.deleted_tags == [("42", "v1.0.0")]
    """
    from gitlab_tags.gateway.gitlab.projects.fake import FakeProjectsGateway
    from gitlab_tags.gateway.gitlab.tags.fake import FakeTagsGateway

    return GitLabGateway(
        tags=tags or FakeTagsGateway(),
        projects=projects or FakeProjectsGateway(),
    )

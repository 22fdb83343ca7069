"""URL path segment encoding for GitLab API endpoints."""

from urllib.parse import quote

from gitlab_tags.gateway.gitlab.types import Project, ProjectRef


def encode_segment(value: str) -> str:
    """Percent-encode a value so it occupies exactly one path segment.

    Tag names and project paths may contain "/", which GitLab expects as %2F.

    Example:
        >>> encode_segment("env/test-tag")
        "env%2Ftest-tag"
    """
    return quote(value, safe="")


def project_segment(project: ProjectRef) -> str:
    """Path segment identifying a project: numeric id or encoded full path.

    Raises:
        ValueError: If the reference is an empty string or a bool
    """
    if isinstance(project, Project):
        return str(project.id)
    # bool is an int subclass; True/False are never valid project ids
    if isinstance(project, bool):
        msg = f"Invalid project reference: {project!r}"
        raise ValueError(msg)
    if isinstance(project, int):
        return str(project)
    stripped = project.strip()
    if not stripped:
        msg = "Project reference must not be empty"
        raise ValueError(msg)
    if stripped.isdigit():
        return stripped
    return encode_segment(stripped)


def project_endpoint(project: ProjectRef, *parts: str) -> str:
    """Build "projects/<id>/<parts...>"; parts are joined as given."""
    return "/".join(["projects", project_segment(project), *parts])

"""Fake GitLab project lookups for testing."""

from collections.abc import Sequence

from gitlab_tags.gateway.gitlab.errors import NotFoundError
from gitlab_tags.gateway.gitlab.paths import project_segment
from gitlab_tags.gateway.gitlab.projects.abc import ProjectsGateway
from gitlab_tags.gateway.gitlab.types import Project, ProjectRef


class FakeProjectsGateway(ProjectsGateway):
    """In-memory fake implementation of GitLab project lookups.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults.
    """

    def __init__(self, *, projects: Sequence[Project] = ()) -> None:
        """Create FakeProjectsGateway with pre-configured state.

        Args:
            projects: Projects resolvable by id or by path_with_namespace
        """
        self._projects: dict[str, Project] = {}
        for project in projects:
            self._projects[str(project.id)] = project
            self._projects[project_segment(project.path_with_namespace)] = project
        self._get_project_calls: list[ProjectRef] = []

    def get_project(self, project: ProjectRef) -> Project:
        self._get_project_calls.append(project)
        key = project_segment(project)
        if key not in self._projects:
            raise NotFoundError(message="404 Project Not Found", endpoint=f"projects/{key}")
        return self._projects[key]

    @property
    def get_project_calls(self) -> list[ProjectRef]:
        """Project references passed to get_project(), in order."""
        return self._get_project_calls

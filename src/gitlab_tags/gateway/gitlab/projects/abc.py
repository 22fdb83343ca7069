"""Abstract base class for GitLab project lookups."""

from abc import ABC, abstractmethod

from gitlab_tags.gateway.gitlab.tags.abc import optional_on_not_found
from gitlab_tags.gateway.gitlab.types import Project, ProjectRef


class ProjectsGateway(ABC):
    """Abstract interface for resolving project references.

    All implementations (real and fake) must implement this interface.
    """

    @abstractmethod
    def get_project(self, project: ProjectRef) -> Project:
        """Get a project by numeric id or "namespace/path".

        Raises:
            NotFoundError: If the project does not exist or is not visible
                to the token
        """
        ...

    def get_optional_project(self, project: ProjectRef) -> Project | None:
        """Get a project, or None if it does not exist."""
        return optional_on_not_found(lambda: self.get_project(project))

"""Production implementation of GitLab project lookups."""

from gitlab_tags.gateway.gitlab.parsing import parse_project
from gitlab_tags.gateway.gitlab.paths import project_endpoint
from gitlab_tags.gateway.gitlab.projects.abc import ProjectsGateway
from gitlab_tags.gateway.gitlab.types import Project, ProjectRef
from gitlab_tags.gateway.http.abc import HttpClient


class RealProjectsGateway(ProjectsGateway):
    """Production implementation over the GitLab REST API v4."""

    def __init__(self, http_client: HttpClient) -> None:
        self._http_client = http_client

    def get_project(self, project: ProjectRef) -> Project:
        response = self._http_client.get(project_endpoint(project))
        return parse_project(response.body)

"""Tests for project lookups (real over FakeHttpClient, and the fake)."""

import pytest

from gitlab_tags.gateway.gitlab.errors import GitLabApiError, NotFoundError
from gitlab_tags.gateway.gitlab.projects.fake import FakeProjectsGateway
from gitlab_tags.gateway.gitlab.projects.real import RealProjectsGateway
from gitlab_tags.gateway.gitlab.types import Project
from gitlab_tags.gateway.http.fake import FakeHttpClient
from tests.test_utils.gitlab_payloads import project_payload


def test_real_get_project_by_path() -> None:
    http_client = FakeHttpClient()
    http_client.set_response(
        "projects/test-group%2Ftest-project", response=project_payload(42)
    )
    gateway = RealProjectsGateway(http_client)

    project = gateway.get_project("test-group/test-project")

    assert project.id == 42
    assert project.path_with_namespace == "test-group/test-project"


def test_real_get_optional_project_missing() -> None:
    gateway = RealProjectsGateway(FakeHttpClient())

    assert gateway.get_optional_project(999) is None


def test_real_get_optional_project_propagates_auth_errors() -> None:
    http_client = FakeHttpClient()
    http_client.set_error("projects/42", status_code=401, message="401 Unauthorized")
    gateway = RealProjectsGateway(http_client)

    with pytest.raises(GitLabApiError) as exc_info:
        gateway.get_optional_project(42)

    assert exc_info.value.status_code == 401


def test_fake_resolves_by_id_and_path() -> None:
    project = Project(id=42, name="test-project", path_with_namespace="test-group/test-project")
    gateway = FakeProjectsGateway(projects=[project])

    assert gateway.get_project(42) is project
    assert gateway.get_project("42") is project
    assert gateway.get_project("test-group/test-project") is project
    assert gateway.get_project_calls == [42, "42", "test-group/test-project"]


def test_fake_missing_project_raises() -> None:
    gateway = FakeProjectsGateway()

    with pytest.raises(NotFoundError):
        gateway.get_project("nobody/nothing")

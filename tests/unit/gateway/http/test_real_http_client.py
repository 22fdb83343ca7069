"""Tests for RealHttpClient using httpx.MockTransport."""

import json

import httpx
import pytest

from gitlab_tags.gateway.gitlab.errors import GitLabApiError, NotFoundError
from gitlab_tags.gateway.http.real import RealHttpClient, api_base_url


def _client(handler, *, base_url: str = "https://gitlab.example.com") -> RealHttpClient:
    return RealHttpClient(
        token="glpat-test", base_url=base_url, transport=httpx.MockTransport(handler)
    )


def test_api_base_url_appends_api_root() -> None:
    assert api_base_url("https://gitlab.example.com") == "https://gitlab.example.com/api/v4/"
    assert api_base_url("https://gitlab.example.com/") == "https://gitlab.example.com/api/v4/"
    assert api_base_url("https://host/api/v4") == "https://host/api/v4/"


def test_get_sends_token_and_keeps_escaped_path() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"name": "env/test-tag"})

    with _client(handler) as client:
        response = client.get("projects/42/repository/tags/env%2Ftest-tag")

    assert response.status_code == 200
    assert response.body == {"name": "env/test-tag"}
    assert seen[0].headers["PRIVATE-TOKEN"] == "glpat-test"
    raw_path = seen[0].url.raw_path.split(b"?")[0]
    assert raw_path == b"/api/v4/projects/42/repository/tags/env%2Ftest-tag"


def test_get_drops_none_params() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    with _client(handler) as client:
        client.get("projects/42/repository/tags", params={"page": 1, "sort": None})

    assert dict(seen[0].url.params) == {"page": "1"}


def test_response_headers_are_lowercased() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[], headers={"X-Total": "7"})

    with _client(handler) as client:
        response = client.get("projects/42/repository/tags")

    assert response.header("X-Total") == "7"
    assert response.headers["x-total"] == "7"


def test_post_sends_json_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"name": "v1"})

    with _client(handler) as client:
        response = client.post(
            "projects/42/repository/tags", data={"tag_name": "v1", "ref": "main"}
        )

    assert response.status_code == 201
    assert seen[0].method == "POST"
    assert json.loads(seen[0].content) == {"tag_name": "v1", "ref": "main"}


def test_delete_with_empty_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    with _client(handler) as client:
        response = client.delete("projects/42/repository/tags/v1")

    assert response.status_code == 204
    assert response.body is None


def test_404_raises_not_found_with_server_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "404 Tag Not Found"})

    with _client(handler) as client, pytest.raises(NotFoundError) as exc_info:
        client.get("projects/42/repository/tags/missing")

    assert exc_info.value.message == "404 Tag Not Found"
    assert exc_info.value.endpoint == "projects/42/repository/tags/missing"


def test_400_raises_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "Target nope is invalid"})

    with _client(handler) as client, pytest.raises(GitLabApiError) as exc_info:
        client.post("projects/42/repository/tags", data={"tag_name": "v1", "ref": "nope"})

    assert exc_info.value.status_code == 400
    assert "Target nope is invalid" in str(exc_info.value)


def test_error_field_and_validation_dicts() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(403, json={"error": "insufficient_scope"})
        return httpx.Response(422, json={"message": {"name": ["is invalid"]}})

    with _client(handler) as client:
        with pytest.raises(GitLabApiError, match="insufficient_scope"):
            client.get("projects/42")
        with pytest.raises(GitLabApiError, match="is invalid"):
            client.post("projects/42/protected_tags", data={"name": ""})


def test_non_json_error_uses_text() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway from proxy")

    with _client(handler) as client, pytest.raises(GitLabApiError) as exc_info:
        client.get("projects/42")

    assert exc_info.value.message == "Bad Gateway from proxy"


def test_transport_failure_has_no_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client, pytest.raises(GitLabApiError) as exc_info:
        client.get("projects/42")

    assert exc_info.value.status_code is None
    assert not isinstance(exc_info.value, NotFoundError)

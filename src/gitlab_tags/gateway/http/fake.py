"""Fake HTTP client for testing gateways that talk to the GitLab API."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from gitlab_tags.gateway.gitlab.errors import GitLabApiError, NotFoundError
from gitlab_tags.gateway.http.abc import HttpClient, HttpResponse, QueryParams


@dataclass(frozen=True)
class RecordedRequest:
    """A request captured by FakeHttpClient."""

    method: str
    endpoint: str
    params: dict[str, str | int] | None
    data: dict[str, Any] | None


class FakeHttpClient(HttpClient):
    """In-memory HTTP client returning canned responses.

    Responses are keyed by (method, endpoint) and, for GET requests with a
    "page" parameter, optionally by page number so that paginated listings can
    be simulated.

    Unconfigured requests behave like a permissive server: GET raises
    NotFoundError, POST/PUT echo the request body, DELETE returns 204.
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str, int | None], HttpResponse] = {}
        self._errors: dict[tuple[str, str], GitLabApiError] = {}
        self._requests: list[RecordedRequest] = []

    def set_response(
        self,
        endpoint: str,
        *,
        response: Any,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        page: int | None = None,
        status_code: int = 200,
    ) -> None:
        """Configure the response body returned for an endpoint.

        Args:
            endpoint: Endpoint relative to the API root
            response: Decoded JSON body to return
            method: HTTP method the response applies to
            headers: Response headers (names are matched case-insensitively)
            page: Only return this response for GET requests with page=<page>
            status_code: Status code reported on the response
        """
        normalized = {name.lower(): value for name, value in (headers or {}).items()}
        self._responses[(method, endpoint, page)] = HttpResponse(
            status_code=status_code, body=response, headers=normalized
        )

    def set_error(
        self,
        endpoint: str,
        *,
        status_code: int,
        message: str,
        method: str = "GET",
    ) -> None:
        """Configure an error raised for an endpoint."""
        error: GitLabApiError
        if status_code == 404:
            error = NotFoundError(message=message, endpoint=endpoint)
        else:
            error = GitLabApiError(status_code=status_code, message=message, endpoint=endpoint)
        self._errors[(method, endpoint)] = error

    def get(self, endpoint: str, *, params: QueryParams | None = None) -> HttpResponse:
        query = {k: v for k, v in (params or {}).items() if v is not None}
        self._requests.append(RecordedRequest("GET", endpoint, query, None))
        self._raise_configured_error("GET", endpoint)

        page = query.get("page")
        page_key = int(page) if page is not None else None
        if ("GET", endpoint, page_key) in self._responses:
            return self._responses[("GET", endpoint, page_key)]
        if ("GET", endpoint, None) in self._responses:
            return self._responses[("GET", endpoint, None)]
        raise NotFoundError(message="404 Not Found", endpoint=endpoint)

    def post(self, endpoint: str, *, data: Mapping[str, Any]) -> HttpResponse:
        return self._write("POST", endpoint, dict(data), default_status=201)

    def put(self, endpoint: str, *, data: Mapping[str, Any]) -> HttpResponse:
        return self._write("PUT", endpoint, dict(data), default_status=200)

    def delete(self, endpoint: str) -> HttpResponse:
        self._requests.append(RecordedRequest("DELETE", endpoint, None, None))
        self._raise_configured_error("DELETE", endpoint)
        if ("DELETE", endpoint, None) in self._responses:
            return self._responses[("DELETE", endpoint, None)]
        return HttpResponse(status_code=204, body=None)

    @property
    def requests(self) -> list[RecordedRequest]:
        """All requests made, in order."""
        return self._requests

    def _write(
        self, method: str, endpoint: str, data: dict[str, Any], *, default_status: int
    ) -> HttpResponse:
        self._requests.append(RecordedRequest(method, endpoint, None, data))
        self._raise_configured_error(method, endpoint)
        if (method, endpoint, None) in self._responses:
            return self._responses[(method, endpoint, None)]
        return HttpResponse(status_code=default_status, body=data)

    def _raise_configured_error(self, method: str, endpoint: str) -> None:
        if (method, endpoint) in self._errors:
            raise self._errors[(method, endpoint)]

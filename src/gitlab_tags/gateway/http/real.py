"""Production HTTP client backed by httpx."""

import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any, Self

import httpx

from gitlab_tags.gateway.gitlab.errors import GitLabApiError, NotFoundError
from gitlab_tags.gateway.http.abc import HttpClient, HttpResponse, QueryParams

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class RealHttpClient(HttpClient):
    """HTTP client for the GitLab REST API v4.

    Authenticates with a personal/project access token sent in the
    PRIVATE-TOKEN header. One httpx.Client (and its connection pool) is held
    for the lifetime of the instance; call close() or use it as a context
    manager to release it.
    """

    def __init__(
        self,
        *,
        token: str,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Create a client for the given GitLab instance.

        Args:
            token: GitLab access token
            base_url: Instance URL (e.g. "https://gitlab.com"); "/api/v4" is
                appended unless already present
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self._client = httpx.Client(
            base_url=api_base_url(base_url),
            headers={"PRIVATE-TOKEN": token, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def get(self, endpoint: str, *, params: QueryParams | None = None) -> HttpResponse:
        query = {k: v for k, v in (params or {}).items() if v is not None}
        return self._request("GET", endpoint, params=query)

    def post(self, endpoint: str, *, data: Mapping[str, Any]) -> HttpResponse:
        return self._request("POST", endpoint, json=dict(data))

    def put(self, endpoint: str, *, data: Mapping[str, Any]) -> HttpResponse:
        return self._request("PUT", endpoint, json=dict(data))

    def delete(self, endpoint: str) -> HttpResponse:
        return self._request("DELETE", endpoint)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, str | int] | None = None,
        json: dict[str, Any] | None = None,
    ) -> HttpResponse:
        logger.debug("%s %s params=%s", method, endpoint, params)
        try:
            response = self._client.request(method, endpoint, params=params, json=json)
        except httpx.HTTPError as e:
            raise GitLabApiError(status_code=None, message=str(e), endpoint=endpoint) from e
        logger.debug("%s %s -> %d", method, endpoint, response.status_code)

        if response.status_code == 404:
            raise NotFoundError(message=_error_message(response), endpoint=endpoint)
        if response.status_code >= 400:
            raise GitLabApiError(
                status_code=response.status_code,
                message=_error_message(response),
                endpoint=endpoint,
            )

        body = response.json() if response.content else None
        headers = {name.lower(): value for name, value in response.headers.items()}
        return HttpResponse(status_code=response.status_code, body=body, headers=headers)


def api_base_url(url: str) -> str:
    """Normalize an instance URL to its REST API v4 root, with trailing slash.

    Example:
        >>> api_base_url("https://gitlab.example.com")
        "https://gitlab.example.com/api/v4/"
    """
    stripped = url.rstrip("/")
    if not stripped.endswith("/api/v4"):
        stripped += "/api/v4"
    return stripped + "/"


def _error_message(response: httpx.Response) -> str:
    """Extract the most useful message from an error response.

    GitLab reports errors as {"message": ...} or {"error": ...}; the message
    may itself be a dict of field validation errors.
    """
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        for key in ("message", "error"):
            if key in payload:
                value = payload[key]
                return value if isinstance(value, str) else str(value)

    if response.text:
        return response.text
    return response.reason_phrase

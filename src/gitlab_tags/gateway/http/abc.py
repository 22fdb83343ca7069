"""Abstract HTTP client for direct GitLab API calls."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Query parameter values accepted by the client; None values are dropped.
QueryParams = Mapping[str, str | int | None]


@dataclass(frozen=True)
class HttpResponse:
    """Decoded response from the GitLab API.

    Attributes:
        status_code: HTTP status code (always < 400; errors are raised)
        body: Decoded JSON body, or None for empty responses (e.g. 204)
        headers: Response headers with lower-cased names
    """

    status_code: int
    body: Any
    headers: Mapping[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        """Look up a response header case-insensitively."""
        return self.headers.get(name.lower())


class HttpClient(ABC):
    """Abstract interface for HTTP calls against the GitLab REST API.

    Endpoints are relative to the API root (e.g. "projects/42/repository/tags").
    Implementations raise GitLabApiError for responses with status >= 400 and
    NotFoundError for 404.
    """

    @abstractmethod
    def get(self, endpoint: str, *, params: QueryParams | None = None) -> HttpResponse:
        """Send a GET request."""
        ...

    @abstractmethod
    def post(self, endpoint: str, *, data: Mapping[str, Any]) -> HttpResponse:
        """Send a POST request with a JSON body."""
        ...

    @abstractmethod
    def put(self, endpoint: str, *, data: Mapping[str, Any]) -> HttpResponse:
        """Send a PUT request with a JSON body."""
        ...

    @abstractmethod
    def delete(self, endpoint: str) -> HttpResponse:
        """Send a DELETE request."""
        ...

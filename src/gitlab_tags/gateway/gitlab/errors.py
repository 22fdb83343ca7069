"""Error types raised by GitLab gateway operations."""


class GitLabApiError(Exception):
    """Error response (or transport failure) from the GitLab REST API.

    Attributes:
        status_code: HTTP status of the failed response, or None when the
            request never produced a response (connection refused, timeout).
        message: Human-readable message extracted from the response.
        endpoint: API endpoint the request was sent to, relative to /api/v4.
    """

    def __init__(self, *, status_code: int | None, message: str, endpoint: str) -> None:
        if status_code is None:
            super().__init__(f"GitLab API request to {endpoint} failed: {message}")
        else:
            super().__init__(f"GitLab API error ({status_code}) for {endpoint}: {message}")
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint


class NotFoundError(GitLabApiError):
    """The requested resource does not exist (HTTP 404)."""

    def __init__(self, *, message: str, endpoint: str) -> None:
        super().__init__(status_code=404, message=message, endpoint=endpoint)

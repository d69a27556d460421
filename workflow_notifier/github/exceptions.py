"""Custom exceptions for the GitHub REST client."""


class GitHubError(Exception):
    """Base exception for all GitHub API errors.

    None of these are recovered locally; they abort the notification.
    """

    pass


class GitHubHTTPError(GitHubError):
    """HTTP request failed with a 4xx/5xx status or never got a response."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        """Initialize HTTP error with status code and URL.

        Args:
            message: Human-readable error message
            status_code: HTTP status code (0 when no response was received)
            url: URL that failed
        """
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class GitHubTimeoutError(GitHubError):
    """HTTP request timed out."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class GitHubResponseError(GitHubError):
    """Response body could not be parsed or had an unexpected shape."""

    pass

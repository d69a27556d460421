"""Minimal GitHub REST API client.

Covers the two lookups the notifier needs: a commit by SHA and the jobs of a
workflow run. Errors are raised, never retried.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from workflow_notifier.config.environment import DEFAULT_GITHUB_API_URL
from workflow_notifier.logging import get_logger

from .exceptions import (
    GitHubHTTPError,
    GitHubResponseError,
    GitHubTimeoutError,
)

logger = get_logger(__name__, component="github")

JOBS_PER_PAGE = 100


class GitHubClient:
    """Thin wrapper around a requests session authenticated for the GitHub API.

    Attributes:
        api_url: REST API base URL
        timeout: HTTP request timeout in seconds
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_GITHUB_API_URL,
        timeout: int = 30,
        user_agent: str = "WorkflowNotifier/1.0",
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: GitHub token (GITHUB_TOKEN or a PAT)
            api_url: REST API base URL
            timeout: HTTP request timeout in seconds
            user_agent: User-Agent header for requests
            session: Optional pre-built session (for testing)
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": user_agent,
            }
        )

    def get_commit(self, owner: str, repo: str, ref: str) -> Dict[str, Any]:
        """Fetch a single commit.

        Args:
            owner: Repository owner
            repo: Repository name
            ref: Commit SHA, branch or tag

        Returns:
            Commit object (includes 'html_url' and 'commit.message')

        Raises:
            GitHubError: On any HTTP, timeout or parsing failure
        """
        data = self._make_request(f"{self.api_url}/repos/{owner}/{repo}/commits/{ref}")
        if not isinstance(data, dict):
            raise GitHubResponseError(
                f"Expected JSON object for commit {ref}, got {type(data).__name__}"
            )
        return data

    def list_jobs_for_workflow_run(self, owner: str, repo: str, run_id: str) -> List[Dict[str, Any]]:
        """List the jobs of a workflow run (first page of up to 100 jobs).

        Args:
            owner: Repository owner
            repo: Repository name
            run_id: Workflow run id

        Returns:
            List of job objects (each with 'id', 'name', 'started_at', ...)

        Raises:
            GitHubError: On any HTTP, timeout or parsing failure
        """
        data = self._make_request(
            f"{self.api_url}/repos/{owner}/{repo}/actions/runs/{run_id}/jobs",
            params={"per_page": str(JOBS_PER_PAGE)},
        )
        if not isinstance(data, dict):
            raise GitHubResponseError(
                f"Expected JSON object for jobs of run {run_id}, got {type(data).__name__}"
            )

        jobs = data.get("jobs", [])
        if not isinstance(jobs, list):
            raise GitHubResponseError(
                f"Expected 'jobs' field to be array, got {type(jobs).__name__}"
            )
        return jobs

    def _make_request(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        """Issue a GET request and decode the JSON body.

        Raises:
            GitHubHTTPError: On 4xx or 5xx HTTP status, or a connection failure
            GitHubTimeoutError: On request timeout
            GitHubResponseError: On invalid JSON
        """
        try:
            logger.debug(
                f"HTTP GET request to {url}",
                extra={"event": "github.request", "url": url, "timeout": self.timeout},
            )

            response = self._session.get(url, params=params, timeout=self.timeout)

            if response.status_code >= 400:
                log_level = logging.WARNING if response.status_code >= 500 else logging.ERROR
                logger.log(
                    log_level,
                    f"HTTP {response.status_code} error from {url}",
                    extra={
                        "event": "github.request.error",
                        "status_code": response.status_code,
                        "url": url,
                    },
                )
                raise GitHubHTTPError(
                    f"HTTP {response.status_code}: {response.reason} ({url})",
                    status_code=response.status_code,
                    url=url,
                )

            try:
                return response.json()
            except ValueError as e:
                raise GitHubResponseError(f"Failed to parse JSON response from {url}: {e}") from e

        except requests.exceptions.Timeout as e:
            raise GitHubTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds",
                url=url,
            ) from e
        except requests.exceptions.RequestException as e:
            raise GitHubHTTPError(
                f"Request to {url} failed: {e}",
                status_code=0,
                url=url,
            ) from e

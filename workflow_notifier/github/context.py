"""Execution context of the GitHub Actions run being reported on."""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from workflow_notifier.config.exceptions import ConfigurationError
from workflow_notifier.logging import get_logger

logger = get_logger(__name__, component="github")

DEFAULT_SERVER_URL = "https://github.com"


@dataclass(frozen=True)
class ActionContext:
    """Snapshot of the GitHub Actions default environment variables.

    Attributes:
        repository: Repository slug, 'owner/repo'
        actor: Login of the user that triggered the run
        event_name: Name of the triggering event (push, pull_request, ...)
        sha: Commit SHA that triggered the run
        ref: Fully qualified ref (refs/heads/main, refs/tags/v1, refs/pull/1/merge)
        head_ref: Source branch of a pull request (GITHUB_HEAD_REF)
        workflow: Workflow name
        job: Job id as written in the workflow file
        run_id: Numeric id of the workflow run
        run_number: Sequential run number of the workflow
        server_url: Base URL of the GitHub web UI
        payload: Parsed webhook event payload
        matrix: Matrix values of the job, or None outside a matrix build
    """

    repository: str
    actor: str = ""
    event_name: str = ""
    sha: str = ""
    ref: str = ""
    head_ref: str = ""
    workflow: str = ""
    job: str = ""
    run_id: str = ""
    run_number: str = ""
    server_url: str = DEFAULT_SERVER_URL
    payload: Dict[str, Any] = field(default_factory=dict)
    matrix: Optional[Dict[str, Any]] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ActionContext":
        """Build the context from GITHUB_* variables and MATRIX_CONTEXT.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            ActionContext for the current run

        Raises:
            ConfigurationError: If GITHUB_REPOSITORY is missing or malformed,
                or MATRIX_CONTEXT is not valid JSON
        """
        env = os.environ if environ is None else environ

        repository = env.get("GITHUB_REPOSITORY", "")
        if "/" not in repository:
            raise ConfigurationError(
                f"Invalid GITHUB_REPOSITORY: '{repository}'. Expected 'owner/repo'.",
                suggestions=[
                    "Run inside GitHub Actions, or export GITHUB_REPOSITORY=owner/repo",
                ],
            )

        return cls(
            repository=repository,
            actor=env.get("GITHUB_ACTOR", ""),
            event_name=env.get("GITHUB_EVENT_NAME", ""),
            sha=env.get("GITHUB_SHA", ""),
            ref=env.get("GITHUB_REF", ""),
            head_ref=env.get("GITHUB_HEAD_REF", ""),
            workflow=env.get("GITHUB_WORKFLOW", ""),
            job=env.get("GITHUB_JOB", ""),
            run_id=env.get("GITHUB_RUN_ID", ""),
            run_number=env.get("GITHUB_RUN_NUMBER", ""),
            server_url=(env.get("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL).rstrip("/"),
            payload=_load_event_payload(env.get("GITHUB_EVENT_PATH")),
            matrix=parse_matrix_context(env.get("MATRIX_CONTEXT")),
        )

    @property
    def owner(self) -> str:
        return self.repository.split("/", 1)[0]

    @property
    def repo(self) -> str:
        return self.repository.split("/", 1)[1]

    @property
    def repository_url(self) -> str:
        return f"{self.server_url}/{self.owner}/{self.repo}"

    @property
    def pull_request(self) -> Optional[Dict[str, Any]]:
        """Pull request object of the event payload, if the event has one."""
        pull_request = self.payload.get("pull_request")
        return pull_request if isinstance(pull_request, dict) else None

    @property
    def pull_request_number(self) -> Optional[int]:
        if self.pull_request is None:
            return None
        return self.pull_request.get("number")

    @property
    def pull_request_head_sha(self) -> Optional[str]:
        if self.pull_request is None:
            return None
        head = self.pull_request.get("head") or {}
        return head.get("sha")

    @property
    def job_name(self) -> str:
        """Display name of the job as the jobs API reports it.

        Matrix jobs are named 'build (ubuntu-latest, 3.12)', with the matrix
        values in the order they appear in MATRIX_CONTEXT.
        """
        if not self.matrix:
            return self.job
        values = ", ".join(_matrix_value(v) for v in self.matrix.values())
        return f"{self.job} ({values})" if values else self.job


def parse_matrix_context(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    """Parse the JSON produced by '${{ toJson(matrix) }}'.

    Args:
        raw: MATRIX_CONTEXT value, possibly None or 'null'

    Returns:
        Matrix mapping, or None when the job is not part of a matrix

    Raises:
        ConfigurationError: If the value is not a JSON object
    """
    if raw is None or raw.strip() in ("", "null"):
        return None

    try:
        matrix = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid MATRIX_CONTEXT: {e}",
            suggestions=["Pass it as MATRIX_CONTEXT: ${{ toJson(matrix) }}"],
        ) from e

    if matrix is None:
        return None
    if not isinstance(matrix, dict):
        raise ConfigurationError(
            f"Invalid MATRIX_CONTEXT: expected a JSON object, got {type(matrix).__name__}",
            suggestions=["Pass it as MATRIX_CONTEXT: ${{ toJson(matrix) }}"],
        )
    return matrix


def _matrix_value(value: Any) -> str:
    # Mirror how the Actions runner prints matrix values in job names
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _load_event_payload(event_path: Optional[str]) -> Dict[str, Any]:
    """Read the webhook payload file; an unreadable file yields an empty payload."""
    if not event_path:
        return {}

    try:
        with open(event_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(
            f"Could not read event payload at {event_path}: {e}",
            extra={"event": "context.payload.unreadable", "path": event_path},
        )
        return {}

    return payload if isinstance(payload, dict) else {}

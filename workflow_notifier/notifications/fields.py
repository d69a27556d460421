"""Resolution of the informational fields shown in the message grid."""

import re
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from workflow_notifier.config.models import ALL_FIELDS, FIELD_ALIASES
from workflow_notifier.github.client import GitHubClient
from workflow_notifier.github.context import ActionContext
from workflow_notifier.github.exceptions import GitHubResponseError
from workflow_notifier.logging import get_logger
from workflow_notifier.utils.timestamps import format_elapsed, parse_iso_datetime, utc_now

from .models import Field

logger = get_logger(__name__, component="fields")

JOB_NOT_FOUND = "Job is not found."
JOB_NOT_FOUND_WARNING = (
    "Job is not found. This can happen if the job is part of a matrix build, "
    "but the matrix context was not passed as env variable. "
    "Please pass it as MATRIX_CONTEXT: ${{ toJson(matrix) }}."
)

REF_PREFIX = re.compile(r"^refs/(heads|tags)/")


class FieldResolver:
    """Builds the requested fields from the run context and the GitHub API.

    Only the requested fields are evaluated, so the commit is fetched only
    for 'message' and the job list only for 'job' or 'duration' (once, even
    when both are requested).
    """

    def __init__(
        self,
        requested: Union[str, Iterable[str]],
        context: ActionContext,
        github_client: GitHubClient,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the resolver.

        Args:
            requested: Comma-separated field names, 'all', or an iterable of names
            context: Execution context of the run
            github_client: Client used for commit and job lookups
            clock: Returns the current UTC time (for the duration field)
        """
        if isinstance(requested, str):
            requested = requested.replace(" ", "").split(",")
        self.requested_fields = [FIELD_ALIASES.get(name, name) for name in requested if name]
        self.context = context
        self.github_client = github_client
        self.clock = clock

        self._jobs: Optional[List[Dict[str, Any]]] = None
        self._job_missing_reported = False

    @property
    def job_name(self) -> str:
        return self.context.job_name

    def includes(self, name: str) -> bool:
        return name in self.requested_fields or ALL_FIELDS in self.requested_fields

    def resolve(self) -> List[Field]:
        """Evaluate requested fields in display order, dropping empty values."""
        fields = []
        for name, title, getter in self._resolvers():
            if not self.includes(name):
                continue
            value = getter()
            if value:
                fields.append(Field(title=title, value=value))
        return fields

    def _resolvers(self) -> List[Tuple[str, str, Callable[[], Optional[str]]]]:
        ref_title = "Tag" if self.context.ref.startswith("refs/tags/") else "Branch"
        return [
            ("repo", "Repository", self.repo),
            ("message", "Message", self.message),
            ("commit", "Commit", self.commit),
            ("actor", "Actor", self.actor),
            ("job", "Job", self.job),
            ("duration", "Duration", self.duration),
            ("eventName", "Event", self.event_name),
            ("ref", ref_title, self.ref),
            ("pr", "Pull request", self.pr),
            ("workflow", "Workflow", self.workflow),
        ]

    def repo(self) -> str:
        ctx = self.context
        return f"<{ctx.repository_url}|{ctx.owner}/{ctx.repo}>"

    def message(self) -> str:
        ctx = self.context
        data = self.github_client.get_commit(ctx.owner, ctx.repo, ctx.sha)
        try:
            first_line = data["commit"]["message"].split("\n")[0]
            html_url = data["html_url"]
        except (KeyError, TypeError, AttributeError) as e:
            raise GitHubResponseError(f"Unexpected commit response for {ctx.sha}: {e}") from e
        return f"<{html_url}|{first_line}>"

    def commit(self) -> str:
        ctx = self.context
        return f"<{ctx.repository_url}/commit/{ctx.sha}|{ctx.sha[:8]}>"

    def actor(self) -> str:
        ctx = self.context
        return f"<{ctx.server_url}/{ctx.actor}|{ctx.actor}>"

    def job(self) -> str:
        current_job = self._current_job()
        if current_job is None:
            return JOB_NOT_FOUND
        return f"<{self.context.repository_url}/runs/{current_job['id']}|{self.job_name}>"

    def duration(self) -> str:
        current_job = self._current_job()
        if current_job is None:
            return JOB_NOT_FOUND

        started_at = parse_iso_datetime(current_job.get("started_at"))
        if started_at is None:
            return ""
        return format_elapsed(self.clock() - started_at)

    def event_name(self) -> str:
        return self.context.event_name

    def ref(self) -> str:
        ctx = self.context
        ref = ctx.ref
        if ref.startswith("refs/tags/"):
            tag = extract_name(ref)
            return f"`<{ctx.repository_url}/releases/tag/{tag}|{tag}>`"
        if ref.startswith("refs/heads/"):
            branch = extract_name(ref)
            return f"`<{ctx.repository_url}/tree/{branch}|{branch}>`"
        if ref.startswith("refs/pull/") and ctx.head_ref:
            branch = extract_name(ctx.head_ref)
            return f"`<{ctx.repository_url}/tree/{branch}|{branch}>`"
        return ref

    def pr(self) -> Optional[str]:
        number = self.context.pull_request_number
        if not number:
            return None
        return f"<{self.context.repository_url}/pull/{number}|#{number}>"

    def workflow(self) -> str:
        ctx = self.context
        sha = ctx.pull_request_head_sha or ctx.sha
        return f"<{ctx.repository_url}/commit/{sha}/checks|{ctx.workflow}>"

    def _current_job(self) -> Optional[Dict[str, Any]]:
        """Find this job in the run's job list, fetching the list once."""
        if self._jobs is None:
            ctx = self.context
            self._jobs = self.github_client.list_jobs_for_workflow_run(
                ctx.owner, ctx.repo, ctx.run_id
            )

        for job in self._jobs:
            if job.get("name") == self.job_name:
                return job

        if not self._job_missing_reported:
            self._job_missing_reported = True
            logger.warning(
                JOB_NOT_FOUND_WARNING,
                extra={"event": "fields.job.not_found", "job_name": self.job_name},
            )
        return None


def extract_name(ref: str) -> str:
    """Strip the refs/heads/ or refs/tags/ prefix from a ref."""
    return REF_PREFIX.sub("", ref)

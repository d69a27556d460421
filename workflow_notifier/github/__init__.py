"""GitHub integration: run context and REST client.

    from workflow_notifier.github import ActionContext, GitHubClient
    context = ActionContext.from_env()
    client = GitHubClient(token, api_url=env_config.github_api_url)
    jobs = client.list_jobs_for_workflow_run(context.owner, context.repo, context.run_id)
"""

from .client import GitHubClient
from .context import ActionContext, parse_matrix_context
from .exceptions import (
    GitHubError,
    GitHubHTTPError,
    GitHubResponseError,
    GitHubTimeoutError,
)

__all__ = [
    "ActionContext",
    "GitHubClient",
    "parse_matrix_context",
    # Exceptions
    "GitHubError",
    "GitHubHTTPError",
    "GitHubTimeoutError",
    "GitHubResponseError",
]

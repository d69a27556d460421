"""Shared fixtures for workflow notifier tests."""

import json
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from workflow_notifier.config.models import NotifyInput
from workflow_notifier.github.context import ActionContext

FIXTURES_DIR = Path(__file__).parent / "fixtures"

NOW = datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc)
JOB_ELAPSED = timedelta(hours=1, minutes=1, seconds=1)

SHA = "f83a356604ae3c5d03e1b46ef4d1ca77d64a90b0"
REPOSITORY = "Codertocat/Hello-World"


def load_fixture(name: str):
    """Load a recorded GitHub API response from tests/fixtures/github."""
    with open(FIXTURES_DIR / "github" / f"{name}.json") as f:
        return json.load(f)


class FakeGitHubClient:
    """Stand-in for GitHubClient serving recorded responses.

    The first job's started_at is moved to NOW - 1h1m1s so the duration
    field renders '1 hour 1 min 1 sec' against the fixed clock.
    """

    def __init__(self, jobs_fixture: str = "actions.runs.jobs"):
        self.jobs_fixture = jobs_fixture
        self.commit_calls = []
        self.jobs_calls = []

    def get_commit(self, owner, repo, ref):
        self.commit_calls.append((owner, repo, ref))
        return load_fixture("repos.commits.get")

    def list_jobs_for_workflow_run(self, owner, repo, run_id):
        self.jobs_calls.append((owner, repo, run_id))
        jobs = load_fixture(self.jobs_fixture)["jobs"]
        jobs[0]["started_at"] = (NOW - JOB_ELAPSED).strftime("%Y-%m-%dT%H:%M:%SZ")
        return jobs


@pytest.fixture
def github_env():
    """Default GitHub Actions environment of a push build."""
    return {
        "GITHUB_WORKFLOW": "CI",
        "GITHUB_RUN_ID": "1",
        "GITHUB_RUN_NUMBER": "42",
        "GITHUB_ACTOR": "Codertocat",
        "GITHUB_REPOSITORY": REPOSITORY,
        "GITHUB_EVENT_NAME": "push",
        "GITHUB_SHA": SHA,
        "GITHUB_REF": "refs/heads/feature/something-new-and-shiny",
        "GITHUB_JOB": "build",
    }


@pytest.fixture
def action_context(github_env):
    """ActionContext of a push build."""
    return ActionContext.from_env(github_env)


@pytest.fixture
def pull_request_context(github_env):
    """ActionContext of a pull_request build with PR #123."""
    env = {
        **github_env,
        "GITHUB_EVENT_NAME": "pull_request",
        "GITHUB_REF": "refs/pull/123/merge",
        "GITHUB_HEAD_REF": "feature/pr-branch",
    }
    payload = {
        "pull_request": {
            "number": 123,
            "head": {"sha": "expected-sha-for-pull_request_event"},
        }
    }
    return replace(ActionContext.from_env(env), payload=payload)


@pytest.fixture
def fake_github():
    """Fake GitHub client with the default job list."""
    return FakeGitHubClient()


@pytest.fixture
def make_inputs():
    """Factory for NotifyInput with sensible defaults."""

    def _make(**overrides):
        values = {"channel": "C0123456", "status": "success", "header": "Build finished"}
        values.update(overrides)
        return NotifyInput(**values)

    return _make

"""Unit tests for field resolution."""

import logging
from dataclasses import replace
from unittest.mock import Mock

import pytest

from conftest import NOW, SHA, FakeGitHubClient
from workflow_notifier.github import ActionContext, GitHubResponseError
from workflow_notifier.notifications import JOB_NOT_FOUND, Field, FieldResolver
from workflow_notifier.notifications.fields import extract_name

REPO_URL = "https://github.com/Codertocat/Hello-World"


def make_resolver(requested, context, github_client=None):
    return FieldResolver(
        requested,
        context,
        github_client or FakeGitHubClient(),
        clock=lambda: NOW,
    )


class TestResolveAll:
    """Tests for the full field set."""

    def test_all_fields_on_push(self, action_context, fake_github):
        fields = make_resolver("all", action_context, fake_github).resolve()

        assert fields == [
            Field("Repository", f"<{REPO_URL}|Codertocat/Hello-World>"),
            Field("Message", f"<{REPO_URL}/commit/{SHA}|Fix all the bugs>"),
            Field("Commit", f"<{REPO_URL}/commit/{SHA}|f83a3566>"),
            Field("Actor", "<https://github.com/Codertocat|Codertocat>"),
            Field("Job", f"<{REPO_URL}/runs/399444496|build>"),
            Field("Duration", "1 hour 1 min 1 sec"),
            Field("Event", "push"),
            Field(
                "Branch",
                f"`<{REPO_URL}/tree/feature/something-new-and-shiny"
                "|feature/something-new-and-shiny>`",
            ),
            Field("Workflow", f"<{REPO_URL}/commit/{SHA}/checks|CI>"),
        ]

    def test_all_fields_on_pull_request(self, pull_request_context, fake_github):
        resolver = make_resolver("all", pull_request_context, fake_github)
        fields = {f.title: f.value for f in resolver.resolve()}

        assert fields["Pull request"] == f"<{REPO_URL}/pull/123|#123>"
        assert fields["Branch"] == f"`<{REPO_URL}/tree/feature/pr-branch|feature/pr-branch>`"
        assert fields["Workflow"] == (
            f"<{REPO_URL}/commit/expected-sha-for-pull_request_event/checks|CI>"
        )

    def test_order_does_not_follow_request(self, action_context):
        fields = make_resolver("workflow,eventName,repo", action_context).resolve()

        assert [f.title for f in fields] == ["Repository", "Event", "Workflow"]


class TestRequestedFields:
    """Tests for field selection."""

    def test_nothing_requested(self, action_context, fake_github):
        assert make_resolver("", action_context, fake_github).resolve() == []
        assert fake_github.commit_calls == []
        assert fake_github.jobs_calls == []

    def test_spaces_and_aliases(self, action_context):
        resolver = make_resolver(" repository , event,pull_request", action_context)

        assert resolver.requested_fields == ["repo", "eventName", "pr"]

    def test_iterable_request(self, action_context):
        fields = make_resolver(["actor", "commit"], action_context).resolve()

        assert [f.title for f in fields] == ["Commit", "Actor"]

    def test_unknown_names_are_ignored(self, action_context):
        fields = make_resolver("colour,actor", action_context).resolve()

        assert [f.title for f in fields] == ["Actor"]

    def test_commit_fetched_only_for_message(self, action_context, fake_github):
        make_resolver("commit,actor,workflow", action_context, fake_github).resolve()

        assert fake_github.commit_calls == []

    def test_jobs_fetched_once_for_job_and_duration(self, action_context, fake_github):
        make_resolver("job,duration", action_context, fake_github).resolve()

        assert fake_github.jobs_calls == [("Codertocat", "Hello-World", "1")]

    def test_message_fetches_commit_by_sha(self, action_context, fake_github):
        make_resolver("message", action_context, fake_github).resolve()

        assert fake_github.commit_calls == [("Codertocat", "Hello-World", SHA)]


class TestRefField:
    """Tests for the branch/tag field."""

    def test_tag(self, action_context):
        context = replace(action_context, ref="refs/tags/v1.0.0")

        assert make_resolver("ref", context).resolve() == [
            Field("Tag", f"`<{REPO_URL}/releases/tag/v1.0.0|v1.0.0>`")
        ]

    def test_pull_request_without_head_ref(self, action_context):
        context = replace(action_context, ref="refs/pull/5/merge", head_ref="")

        assert make_resolver("ref", context).resolve() == [Field("Branch", "refs/pull/5/merge")]

    def test_branch_containing_tags_segment(self, action_context):
        context = replace(action_context, ref="refs/heads/fix/refs/tags/parsing")

        assert make_resolver("ref", context).resolve() == [
            Field("Branch", f"`<{REPO_URL}/tree/fix/refs/tags/parsing|fix/refs/tags/parsing>`")
        ]

    def test_empty_ref_is_omitted(self, action_context):
        context = replace(action_context, ref="")

        assert make_resolver("ref", context).resolve() == []

    @pytest.mark.parametrize(
        "ref,expected",
        [
            ("refs/heads/main", "main"),
            ("refs/tags/v2", "v2"),
            ("feature/x", "feature/x"),
        ],
    )
    def test_extract_name(self, ref, expected):
        assert extract_name(ref) == expected


class TestJobFields:
    """Tests for job and duration."""

    def test_matrix_job(self, github_env):
        context = ActionContext.from_env({**github_env, "MATRIX_CONTEXT": '{"os": "ubuntu-18.04"}'})
        github = FakeGitHubClient("actions.matrix-runs.jobs")

        fields = make_resolver("job,duration", context, github).resolve()

        assert fields == [
            Field("Job", f"<{REPO_URL}/runs/399444496|build (ubuntu-18.04)>"),
            Field("Duration", "1 hour 1 min 1 sec"),
        ]

    def test_job_not_found(self, action_context, caplog):
        context = replace(action_context, job="deploy")

        with caplog.at_level(logging.WARNING):
            fields = make_resolver("job,duration", context).resolve()

        assert fields == [Field("Job", JOB_NOT_FOUND), Field("Duration", JOB_NOT_FOUND)]
        warnings = [r for r in caplog.records if getattr(r, "event", None) == "fields.job.not_found"]
        assert len(warnings) == 1
        assert "MATRIX_CONTEXT" in warnings[0].getMessage()

    def test_matrix_job_without_matrix_context(self, action_context):
        github = FakeGitHubClient("actions.matrix-runs.jobs")

        fields = make_resolver("job", action_context, github).resolve()

        assert fields == [Field("Job", JOB_NOT_FOUND)]

    def test_duration_without_started_at(self, action_context):
        github = Mock()
        github.list_jobs_for_workflow_run.return_value = [{"id": 1, "name": "build"}]

        assert make_resolver("duration", action_context, github).resolve() == []

    def test_duration_under_one_second(self, action_context):
        github = Mock()
        github.list_jobs_for_workflow_run.return_value = [
            {"id": 1, "name": "build", "started_at": NOW.strftime("%Y-%m-%dT%H:%M:%SZ")}
        ]

        assert make_resolver("duration", action_context, github).resolve() == []


class TestErrors:
    """Tests for GitHub failures."""

    def test_unexpected_commit_response(self, action_context):
        github = Mock()
        github.get_commit.return_value = {"sha": SHA}

        with pytest.raises(GitHubResponseError, match="Unexpected commit response"):
            make_resolver("message", action_context, github).resolve()

    def test_lookup_errors_propagate(self, action_context):
        github = Mock()
        github.list_jobs_for_workflow_run.side_effect = GitHubResponseError("boom")

        with pytest.raises(GitHubResponseError):
            make_resolver("job", action_context, github).resolve()

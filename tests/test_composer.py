"""Unit tests for message composition."""

import json

import pytest

from conftest import NOW, FakeGitHubClient
from workflow_notifier.notifications import (
    CustomBlocksError,
    FieldResolver,
    InvalidStatusError,
    MessageComposer,
    icon_for_status,
    parse_custom_blocks,
)
from workflow_notifier.notifications.blocks import GITHUB_LOGO_URL

RUN_URL = "https://github.com/Codertocat/Hello-World/actions/runs/1"


@pytest.fixture
def compose(action_context):
    """Compose a message for the given inputs against the push context."""

    def _compose(inputs, context=action_context, github=None):
        resolver = FieldResolver(
            inputs.fields, context, github or FakeGitHubClient(), clock=lambda: NOW
        )
        return MessageComposer(inputs, context, resolver)

    return _compose


def block_types(payload):
    return [block["type"] for block in payload.blocks]


class TestCompose:
    """Tests for composed messages."""

    def test_header_only(self, compose, make_inputs):
        payload = compose(make_inputs(header="Build finished")).compose()

        assert payload.channel == "C0123456"
        assert payload.text == ""
        assert payload.blocks == [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": "Build finished", "emoji": True},
            },
            {"type": "divider"},
            {
                "type": "context",
                "elements": [
                    {"type": "image", "image_url": GITHUB_LOGO_URL, "alt_text": "GitHub Logo"},
                    {
                        "type": "mrkdwn",
                        "text": f"GitHub Action: CI <{RUN_URL}|#42> :white_check_mark:",
                    },
                ],
            },
        ]

    def test_block_order(self, compose, make_inputs):
        inputs = make_inputs(
            header="Deploy",
            text="Deployed to production",
            changelog="- Fix all the bugs",
            fields="repo,actor",
            buttons="Run|primary|https://example.com/run",
        )

        payload = compose(inputs).compose()

        assert block_types(payload) == [
            "header",
            "section",
            "section",
            "section",
            "actions",
            "divider",
            "context",
        ]
        assert payload.text == "Deployed to production"
        assert payload.blocks[1]["text"]["text"] == "Deployed to production"
        assert payload.blocks[2]["text"]["text"] == "*Changelog*\n```- Fix all the bugs```"
        assert [f["text"] for f in payload.blocks[3]["fields"]] == [
            "*Repository*\n<https://github.com/Codertocat/Hello-World|Codertocat/Hello-World>",
            "*Actor*\n<https://github.com/Codertocat|Codertocat>",
        ]
        assert payload.blocks[4]["elements"][0]["url"] == "https://example.com/run"

    def test_mention_in_text(self, compose, make_inputs):
        inputs = make_inputs(
            status="failure",
            text="*Deploy*\nProduction deploy failed",
            mention="here",
            if_mention="failure",
        )

        payload = compose(inputs).compose()

        assert payload.blocks[1]["text"]["text"] == "*Deploy*\n<!here> Production deploy failed"
        assert payload.text == "*Deploy*\nProduction deploy failed"

    def test_mention_without_text(self, compose, make_inputs):
        payload = compose(make_inputs(mention="U024BE7LH")).compose()

        assert payload.blocks[1] == {
            "type": "section",
            "text": {"type": "mrkdwn", "text": "<@U024BE7LH>"},
        }

    def test_mention_condition_not_met_without_text(self, compose, make_inputs):
        inputs = make_inputs(mention="here", if_mention="failure")

        payload = compose(inputs).compose()

        assert block_types(payload) == ["header", "divider", "context"]

    def test_invalid_status_with_text(self, compose, make_inputs):
        with pytest.raises(InvalidStatusError):
            compose(make_inputs(status="skipped", text="Skipped")).compose()

    def test_unknown_status_without_text(self, compose, make_inputs):
        payload = compose(make_inputs(status="in_progress")).compose()

        assert payload.blocks[-1]["elements"][1]["text"].endswith(":arrows_counterclockwise:")

    def test_malformed_buttons_drop_actions_block(self, compose, make_inputs):
        payload = compose(make_inputs(buttons="not a button")).compose()

        assert "actions" not in block_types(payload)

    def test_no_fields_skips_github(self, compose, make_inputs):
        github = FakeGitHubClient()

        compose(make_inputs(), github=github).compose()

        assert github.commit_calls == []
        assert github.jobs_calls == []


class TestCustom:
    """Tests for custom_blocks mode."""

    def test_custom_blocks_are_used_verbatim(self, compose, make_inputs):
        custom = [{"type": "section", "text": {"type": "mrkdwn", "text": "Custom"}}]
        inputs = make_inputs(custom_blocks=json.dumps(custom), text="Fallback")

        payload = compose(inputs).custom()

        assert payload.blocks == custom
        assert payload.text == "Fallback"
        assert payload.channel == "C0123456"

    def test_invalid_json(self):
        with pytest.raises(CustomBlocksError, match="not valid JSON"):
            parse_custom_blocks("[{")

    def test_not_an_array(self):
        with pytest.raises(CustomBlocksError, match="JSON array"):
            parse_custom_blocks('{"type": "divider"}')


class TestFooter:
    """Tests for the footer line."""

    @pytest.mark.parametrize(
        "status,icon",
        [
            ("success", ":white_check_mark:"),
            ("failure", ":no_entry:"),
            ("cancelled", ":warning:"),
            ("skipped", ":arrows_counterclockwise:"),
        ],
    )
    def test_icon_for_status(self, status, icon):
        assert icon_for_status(status) == icon

    def test_footer_text(self, compose, make_inputs):
        composer = compose(make_inputs(status="Failure"))

        assert composer.footer_text() == f"GitHub Action: CI <{RUN_URL}|#42> :no_entry:"

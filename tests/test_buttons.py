"""Unit tests for button parsing."""

from workflow_notifier.notifications import Button, parse_buttons


def test_plain_and_styled_buttons():
    spec = (
        "Run|https://github.com/Codertocat/Hello-World/actions/runs/1\n"
        "Rollback|danger|https://example.com/rollback"
    )

    assert parse_buttons(spec) == [
        Button(label="Run", url="https://github.com/Codertocat/Hello-World/actions/runs/1"),
        Button(label="Rollback", url="https://example.com/rollback", style="danger"),
    ]


def test_lines_are_trimmed():
    assert parse_buttons("  Docs|https://example.com/docs  \n") == [
        Button(label="Docs", url="https://example.com/docs")
    ]


def test_extra_components_are_ignored():
    assert parse_buttons("Docs|primary|https://example.com/docs|extra") == [
        Button(label="Docs", url="https://example.com/docs", style="primary")
    ]


def test_malformed_lines_are_skipped():
    spec = "\n".join(
        [
            "Docs",
            "|https://example.com/docs",
            "Docs|",
            "Docs||https://example.com/docs",
            "",
            "Keep|https://example.com/keep",
        ]
    )

    assert parse_buttons(spec) == [Button(label="Keep", url="https://example.com/keep")]


def test_empty_input():
    assert parse_buttons("") == []


def test_block_elements():
    plain, styled = parse_buttons("Docs|https://example.com/docs\nRun|primary|https://example.com/run")

    assert plain.to_block_element() == {
        "type": "button",
        "text": {"type": "plain_text", "text": "Docs", "emoji": True},
        "url": "https://example.com/docs",
    }
    assert styled.to_block_element() == {
        "type": "button",
        "text": {"type": "plain_text", "text": "Run", "emoji": True},
        "style": "primary",
        "url": "https://example.com/run",
    }


def test_markdown_link_is_not_a_button():
    assert parse_buttons("[Download](https://example.com/file.txt)") == []

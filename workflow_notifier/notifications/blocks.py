"""Slack Block Kit block builders."""

from typing import Any, Dict, List

from .models import Button, Field

GITHUB_LOGO_URL = "https://github.githubassets.com/apple-touch-icon.png"


def header(text: str) -> Dict[str, Any]:
    """Create a header block."""
    return {
        "type": "header",
        "text": {"type": "plain_text", "text": text, "emoji": True},
    }


def section(text: str) -> Dict[str, Any]:
    """Create a section block with markdown."""
    return {
        "type": "section",
        "text": {"type": "mrkdwn", "text": text},
    }


def changelog_section(changelog: str) -> Dict[str, Any]:
    """Create a section showing the changelog as a code block."""
    return section(f"*Changelog*\n```{changelog}```")


def fields_section(fields: List[Field]) -> Dict[str, Any]:
    """Create a section block laid out as a two-column field grid."""
    return {
        "type": "section",
        "fields": [f.to_block_element() for f in fields],
    }


def actions(buttons: List[Button]) -> Dict[str, Any]:
    """Create an actions block holding link buttons."""
    return {
        "type": "actions",
        "elements": [b.to_block_element() for b in buttons],
    }


def divider() -> Dict[str, str]:
    """Create a divider block."""
    return {"type": "divider"}


def footer_context(text: str) -> Dict[str, Any]:
    """Create the footer context block: GitHub logo followed by text."""
    return {
        "type": "context",
        "elements": [
            {
                "type": "image",
                "image_url": GITHUB_LOGO_URL,
                "alt_text": "GitHub Logo",
            },
            {"type": "mrkdwn", "text": text},
        ],
    }

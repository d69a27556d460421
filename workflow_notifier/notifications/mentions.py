"""Mention rendering and injection into message text."""

import re
from typing import List

from workflow_notifier.config.models import MENTIONABLE_STATUSES

from .models import InvalidStatusError

GROUP_MENTIONS = ("here", "channel")
SUBTEAM_MARKER = "subteam^"

# A "fake headline": a single bold word on the first line, e.g. "*Comment*\n"
FAKE_HEADLINE = re.compile(r"^\*\w+\*\n")


def format_mention(target: str) -> str:
    """Render one mention target in Slack syntax.

    'here', 'channel' and user groups ('subteam^ID') are special mentions;
    everything else is treated as a user ID.

    Example:
        >>> format_mention("here")
        '<!here>'
        >>> format_mention("U024BE7LH")
        '<@U024BE7LH>'
    """
    if SUBTEAM_MARKER in target or target in GROUP_MENTIONS:
        return f"<!{target}>"
    return f"<@{target}>"


def should_mention(status: str, conditions: List[str]) -> bool:
    """Check whether the mention condition list matches a status."""
    return "always" in conditions or status in conditions


def mention_text(mention: str, status: str, conditions: List[str]) -> str:
    """Render all mention targets for a status, or '' if none apply.

    Args:
        mention: Comma-separated targets; spaces are ignored
        status: Current job status
        conditions: Statuses that trigger the mention, or ['always']

    Returns:
        Space-separated rendered mentions
    """
    if not should_mention(status, conditions):
        return ""

    targets = [t for t in mention.replace(" ", "").split(",") if t]
    return " ".join(format_mention(t) for t in targets)


def inject_mention(text: str, mention: str, status: str, conditions: List[str]) -> str:
    """Insert the mention into the message text.

    The mention goes right after a leading fake headline when there is one,
    otherwise in front of the text.

    Args:
        text: Message text
        mention: Comma-separated mention targets
        status: Current job status
        conditions: Statuses that trigger the mention, or ['always']

    Returns:
        Text with the mention applied, stripped of surrounding whitespace

    Raises:
        InvalidStatusError: If status is not success, failure or cancelled
    """
    if status not in MENTIONABLE_STATUSES:
        raise InvalidStatusError(status)

    rendered = mention_text(mention, status, conditions)
    if not rendered:
        return text.strip()

    if FAKE_HEADLINE.match(text):
        position = text.index("\n") + 1
        return f"{text[:position]}{rendered} {text[position:]}".strip()

    return f"{rendered} {text}".strip()

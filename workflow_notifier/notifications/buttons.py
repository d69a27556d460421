"""Parsing of 'label|[style|]url' button specifications."""

from typing import List

from .models import Button


def parse_buttons(spec: str) -> List[Button]:
    """Parse newline-separated button lines.

    Each line is split on '|' and only the first three parts are kept.
    'label|url' yields a plain button and 'label|style|url' a styled one.
    Lines of any other shape, or with an empty part, are skipped.

    Args:
        spec: Button specification text

    Returns:
        Parsed buttons in input order

    Example:
        >>> [b.style for b in parse_buttons("Get|primary|https://x/a\\nInstall|https://x/b")]
        ['primary', None]
    """
    buttons = []

    for line in spec.split("\n"):
        components = line.strip().split("|")[:3]

        if not all(components):
            continue

        if len(components) == 2:
            label, url = components
            buttons.append(Button(label=label, url=url))
        elif len(components) == 3:
            label, style, url = components
            buttons.append(Button(label=label, url=url, style=style))

    return buttons

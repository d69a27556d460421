"""Additional validation utilities for notifier inputs."""

import warnings
from typing import Any, Dict, List

from .models import ALL_FIELDS, FIELD_ALIASES, FIELD_NAMES, MENTIONABLE_STATUSES


def check_for_warnings(inputs: Dict[str, Any]) -> List[str]:
    """
    Check raw inputs for likely mistakes that do not stop the notification.

    Args:
        inputs: Merged raw input dictionary (before model validation)

    Returns:
        List of warning messages
    """
    warning_messages = []

    # Unknown field names are ignored by the field resolver
    fields = inputs.get("fields") or ""
    if isinstance(fields, str):
        known = set(FIELD_NAMES) | set(FIELD_ALIASES) | {ALL_FIELDS}
        for name in fields.replace(" ", "").split(","):
            if name and name not in known:
                warning_messages.append(
                    f"Unknown field '{name}' will be ignored. "
                    f"Known fields: {', '.join(FIELD_NAMES)}"
                )

    # Mention conditions naming statuses that can never carry a mention
    if_mention = inputs.get("if_mention") or ""
    if isinstance(if_mention, str) and inputs.get("mention"):
        for condition in if_mention.lower().split(","):
            condition = condition.strip()
            if condition and condition != "always" and condition not in MENTIONABLE_STATUSES:
                warning_messages.append(
                    f"if_mention condition '{condition}' never matches; "
                    f"use one of: always, {', '.join(MENTIONABLE_STATUSES)}"
                )

    # Button lines that the parser will drop
    buttons = inputs.get("buttons") or ""
    if isinstance(buttons, str):
        for line in buttons.split("\n"):
            line = line.strip()
            if not line:
                continue
            components = line.split("|")[:3]
            if len(components) not in (2, 3) or not all(components):
                warning_messages.append(
                    f"Button line '{line}' is not 'label|url' or 'label|style|url' and will be dropped"
                )

    # Composition options have no effect next to custom_blocks
    if inputs.get("custom_blocks"):
        ignored = [
            key
            for key in ("header", "fields", "changelog", "buttons", "mention")
            if inputs.get(key)
        ]
        if ignored:
            warning_messages.append(
                f"custom_blocks is set, so these inputs are ignored: {', '.join(ignored)}"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)

"""Composition of the Slack message from inputs, run context and fields."""

import json
from typing import Any, Dict, List

from workflow_notifier.config.models import NotifyInput
from workflow_notifier.github.context import ActionContext
from workflow_notifier.logging import get_logger

from . import blocks
from .buttons import parse_buttons
from .fields import FieldResolver
from .mentions import inject_mention
from .models import CustomBlocksError, MessagePayload

logger = get_logger(__name__, component="composer")

STATUS_ICONS = {
    "success": ":white_check_mark:",
    "failure": ":no_entry:",
    "cancelled": ":warning:",
}
RUNNING_ICON = ":arrows_counterclockwise:"


def icon_for_status(status: str) -> str:
    """Emoji shown in the footer for a job status."""
    return STATUS_ICONS.get(status, RUNNING_ICON)


def parse_custom_blocks(raw: str) -> List[Any]:
    """Parse a raw Block Kit JSON array.

    Raises:
        CustomBlocksError: If the text is not valid JSON or not an array
    """
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CustomBlocksError(f"custom_blocks is not valid JSON: {e}") from e

    if not isinstance(parsed, list):
        raise CustomBlocksError(
            f"custom_blocks must be a JSON array of blocks, got {type(parsed).__name__}"
        )
    return parsed


class MessageComposer:
    """Assembles the message blocks.

    Block order is fixed: header, text, changelog, fields, buttons, divider,
    footer. Every block but the last two is optional.
    """

    def __init__(
        self,
        inputs: NotifyInput,
        context: ActionContext,
        field_resolver: FieldResolver,
    ):
        self.inputs = inputs
        self.context = context
        self.field_resolver = field_resolver

    def compose(self) -> MessagePayload:
        """Build the full message.

        Raises:
            InvalidStatusError: If text or a mention is given and the status
                is not success, failure or cancelled
            GitHubError: If a field lookup fails
        """
        inputs = self.inputs
        message_blocks: List[Dict[str, Any]] = []

        if inputs.header:
            message_blocks.append(blocks.header(inputs.header))

        if inputs.text or inputs.mention:
            text = inject_mention(
                inputs.text, inputs.mention, inputs.status, inputs.mention_conditions
            )
            if text:
                message_blocks.append(blocks.section(text))

        if inputs.changelog:
            message_blocks.append(blocks.changelog_section(inputs.changelog))

        fields = self.field_resolver.resolve()
        if fields:
            message_blocks.append(blocks.fields_section(fields))

        if inputs.buttons:
            buttons = parse_buttons(inputs.buttons)
            if buttons:
                message_blocks.append(blocks.actions(buttons))

        message_blocks.append(blocks.divider())
        message_blocks.append(blocks.footer_context(self.footer_text()))

        logger.debug(
            f"Composed message with {len(message_blocks)} blocks",
            extra={"event": "composer.composed", "block_count": len(message_blocks)},
        )

        return MessagePayload(channel=inputs.channel, text=inputs.text, blocks=message_blocks)

    def custom(self) -> MessagePayload:
        """Build the message from custom_blocks, skipping all composition."""
        return MessagePayload(
            channel=self.inputs.channel,
            text=self.inputs.text,
            blocks=parse_custom_blocks(self.inputs.custom_blocks),
        )

    def footer_text(self) -> str:
        ctx = self.context
        run_url = f"{ctx.repository_url}/actions/runs/{ctx.run_id}"
        return (
            f"GitHub Action: {ctx.workflow} <{run_url}|#{ctx.run_number}> "
            f"{icon_for_status(self.inputs.status)}"
        )

"""Notification service for posting workflow status messages.

Ties the composer and the Slack client together: picks custom-blocks mode or
composed mode, builds the payload and posts it once.
"""

import json
import logging
from typing import Optional

from workflow_notifier.config.models import NotifyInput
from workflow_notifier.github.context import ActionContext
from workflow_notifier.logging import get_logger
from workflow_notifier.logging.context import log_context

from .composer import MessageComposer
from .fields import FieldResolver
from .models import DeliveryResult, MessagePayload
from .slack_client import SlackClient

logger = get_logger(__name__, component="notification")


class NotificationService:
    """Service that turns notifier inputs into one posted Slack message.

    The GitHub client is only consulted through the field resolver, so a
    message without fields never calls the GitHub API.
    """

    def __init__(
        self,
        github_client,
        slack_client: SlackClient,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize notification service.

        Args:
            github_client: GitHubClient used for field lookups
            slack_client: SlackClient used for delivery
            logger_instance: Logger instance (uses module logger if None)
        """
        self.github_client = github_client
        self.slack_client = slack_client
        self.logger = logger_instance or logger

    def build_payload(self, inputs: NotifyInput, context: ActionContext) -> MessagePayload:
        """Build the message payload without sending it.

        Args:
            inputs: Validated notifier inputs
            context: Execution context of the run

        Returns:
            MessagePayload ready for chat.postMessage

        Raises:
            CustomBlocksError: If custom_blocks is not a JSON array
            InvalidStatusError: If a mention is requested for an unknown status
            GitHubError: If a field lookup fails
        """
        resolver = FieldResolver(inputs.requested_fields, context, self.github_client)
        composer = MessageComposer(inputs, context, resolver)

        if inputs.custom_blocks:
            payload = composer.custom()
            mode = "custom"
        else:
            payload = composer.compose()
            mode = "composed"

        self.logger.debug(
            json.dumps(payload.blocks),
            extra={"event": "notification.payload.built", "mode": mode},
        )
        return payload

    def notify(self, inputs: NotifyInput, context: ActionContext) -> DeliveryResult:
        """Build the message and post it to Slack.

        Args:
            inputs: Validated notifier inputs
            context: Execution context of the run

        Returns:
            DeliveryResult of the post

        Raises:
            NotificationError: On composition or delivery failure
            GitHubError: If a field lookup fails
        """
        with log_context(
            repository=context.repository,
            run_id=context.run_id,
            channel=inputs.channel,
            status=inputs.status,
        ):
            payload = self.build_payload(inputs, context)
            result = self.slack_client.post_message(payload)

            self.logger.info(
                f"Notification sent to {result.channel}",
                extra={"event": "notification.send.success", "ts": result.ts},
            )
            return result

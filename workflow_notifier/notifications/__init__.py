"""Slack message composition and delivery.

This module provides the notification pipeline:
- NotificationService: builds the message and posts it
- MessageComposer: orders header, text, changelog, fields, buttons and footer
- FieldResolver: repository/commit/job/... fields from the run context
- SlackClient: chat.postMessage wrapper
"""

from .buttons import parse_buttons
from .composer import MessageComposer, icon_for_status, parse_custom_blocks
from .fields import JOB_NOT_FOUND, FieldResolver
from .mentions import format_mention, inject_mention, mention_text
from .models import (
    Button,
    CustomBlocksError,
    DeliveryResult,
    Field,
    InvalidStatusError,
    MessagePayload,
    NotificationError,
    SlackAPIError,
    SlackDeliveryError,
)
from .service import NotificationService
from .slack_client import SlackClient

__all__ = [
    # Main service
    "NotificationService",
    # Components
    "MessageComposer",
    "FieldResolver",
    "SlackClient",
    # Models and results
    "Button",
    "Field",
    "MessagePayload",
    "DeliveryResult",
    # Exceptions
    "NotificationError",
    "InvalidStatusError",
    "CustomBlocksError",
    "SlackDeliveryError",
    "SlackAPIError",
    # Utilities
    "icon_for_status",
    "parse_buttons",
    "parse_custom_blocks",
    "format_mention",
    "mention_text",
    "inject_mention",
    "JOB_NOT_FOUND",
]

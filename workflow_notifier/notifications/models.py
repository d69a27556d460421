"""Data models and exceptions for message composition and delivery."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class NotificationError(Exception):
    """Base exception for notification-related errors."""

    pass


class InvalidStatusError(NotificationError):
    """Raised when a mention is requested for a status that cannot carry one."""

    def __init__(self, status: str) -> None:
        super().__init__(f"invalid status: {status}")
        self.status = status


class CustomBlocksError(NotificationError):
    """Raised when custom_blocks is not a valid JSON array."""

    pass


class SlackDeliveryError(NotificationError):
    """Raised when the Slack API could not be reached."""

    pass


class SlackAPIError(NotificationError):
    """Raised when Slack answers with an HTTP error or 'ok': false."""

    def __init__(self, message: str, error: Optional[str] = None, status_code: int = 0) -> None:
        """Initialize API error.

        Args:
            message: Human-readable error message
            error: Slack error code (e.g. 'channel_not_found')
            status_code: HTTP status code of the response
        """
        super().__init__(message)
        self.error = error
        self.status_code = status_code


@dataclass(frozen=True)
class Field:
    """A labeled value shown in the fields grid of the message."""

    title: str
    value: str

    def to_block_element(self) -> Dict[str, str]:
        return {"type": "mrkdwn", "text": f"*{self.title}*\n{self.value}"}


@dataclass(frozen=True)
class Button:
    """A link button parsed from a 'label|[style|]url' line."""

    label: str
    url: str
    style: Optional[str] = None

    def to_block_element(self) -> Dict[str, Any]:
        element: Dict[str, Any] = {
            "type": "button",
            "text": {"type": "plain_text", "text": self.label, "emoji": True},
        }
        if self.style:
            element["style"] = self.style
        element["url"] = self.url
        return element


@dataclass
class MessagePayload:
    """Arguments for chat.postMessage.

    Attributes:
        channel: Destination channel
        text: Fallback text used in notifications
        blocks: Block Kit blocks, in display order
    """

    channel: str
    text: str
    blocks: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"channel": self.channel, "text": self.text, "blocks": self.blocks}


@dataclass
class DeliveryResult:
    """Outcome of a successful chat.postMessage call.

    Attributes:
        channel: Channel ID the message was posted to
        ts: Timestamp that identifies the message in Slack
    """

    channel: str
    ts: Optional[str] = None

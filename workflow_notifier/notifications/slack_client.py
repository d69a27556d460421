"""Slack Web API client for message delivery.

Wraps a single chat.postMessage call. There is no retry: a failed post
fails the invocation.
"""

import logging
from typing import Optional

import requests

from workflow_notifier.config.environment import DEFAULT_SLACK_API_URL

from .models import DeliveryResult, MessagePayload, SlackAPIError, SlackDeliveryError

logger = logging.getLogger(__name__)


class SlackClient:
    """Posts messages with a Slack bot token.

    Designed to be easily mockable for testing: pass a session or patch
    post_message().
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_SLACK_API_URL,
        timeout: int = 30,
        user_agent: str = "WorkflowNotifier/1.0",
        session: Optional[requests.Session] = None,
    ):
        """Initialize Slack client.

        Args:
            token: Bot token (xoxb-...)
            api_url: Web API base URL
            timeout: HTTP request timeout in seconds
            user_agent: User-Agent header for requests
            session: Optional pre-built session (for testing)
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json; charset=utf-8",
                "User-Agent": user_agent,
            }
        )

    def post_message(self, payload: MessagePayload) -> DeliveryResult:
        """Send a message via chat.postMessage.

        Args:
            payload: Channel, fallback text and blocks

        Returns:
            DeliveryResult with the channel ID and message timestamp

        Raises:
            SlackDeliveryError: If the request could not be completed
            SlackAPIError: If Slack rejected the message
        """
        url = f"{self.api_url}/chat.postMessage"
        logger.debug(f"Posting message to channel {payload.channel}")

        try:
            response = self._session.post(url, json=payload.to_dict(), timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            error_msg = f"Slack request timed out after {self.timeout} seconds"
            logger.error(error_msg)
            raise SlackDeliveryError(error_msg) from e
        except requests.exceptions.RequestException as e:
            error_msg = f"Network error during Slack delivery: {e}"
            logger.error(error_msg)
            raise SlackDeliveryError(error_msg) from e

        if response.status_code >= 400:
            raise SlackAPIError(
                f"Slack API returned HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SlackAPIError(
                f"Failed to parse Slack API response: {e}",
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict) or not data.get("ok"):
            error = data.get("error") if isinstance(data, dict) else None
            raise SlackAPIError(
                f"Slack API error: {error or 'unknown_error'}",
                error=error,
                status_code=response.status_code,
            )

        logger.debug(f"Message posted to {data.get('channel')} (ts={data.get('ts')})")
        return DeliveryResult(channel=data.get("channel", payload.channel), ts=data.get("ts"))

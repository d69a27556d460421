"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

# Statuses a mention can be attached to.
MENTIONABLE_STATUSES = ("success", "failure", "cancelled")

# Field names in the order they appear in the message, with accepted aliases.
FIELD_NAMES = (
    "repo",
    "message",
    "commit",
    "actor",
    "job",
    "duration",
    "eventName",
    "ref",
    "pr",
    "workflow",
)
FIELD_ALIASES = {
    "repository": "repo",
    "event": "eventName",
    "pull_request": "pr",
}
ALL_FIELDS = "all"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"
    GITHUB = "github"


class NotifyInput(BaseModel):
    """Inputs describing one notification.

    Built once per invocation and never mutated afterwards.
    """

    channel: str = Field(..., min_length=1, description="Slack channel ID or name")
    status: str = Field(..., min_length=1, description="Job status (success, failure, cancelled, ...)")
    mention: str = Field("", description="Comma-separated user IDs, group IDs, 'here' or 'channel'")
    if_mention: str = Field(
        "",
        validate_default=True,
        description="Comma-separated statuses that trigger the mention, or 'always'",
    )
    fields: str = Field("", description="Comma-separated field names, or 'all'")
    text: str = Field("", description="Message text (mrkdwn)")
    header: str = Field("", description="Header text")
    changelog: str = Field("", description="Changelog text shown in a code block")
    buttons: str = Field("", description="Newline-separated 'label|[style|]url' button specs")
    custom_blocks: str = Field("", description="Raw Block Kit JSON array; bypasses composition")

    model_config = {"frozen": True}

    @field_validator("channel", "status")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from required fields."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("status")
    @classmethod
    def lowercase_status(cls, v: str) -> str:
        return v.lower()

    @field_validator("if_mention")
    @classmethod
    def default_if_mention(cls, v: str) -> str:
        """Lowercase the condition; an empty condition means 'always'."""
        normalized = v.strip().lower()
        return normalized or "always"

    @model_validator(mode="after")
    def require_message_content(self):
        """Require something to send."""
        if not self.header and not self.text and not self.custom_blocks:
            raise ValueError(
                "It is required to provide one of the following inputs: "
                "'header', 'text' or 'custom_blocks'."
            )
        return self

    @property
    def mention_conditions(self) -> List[str]:
        """Statuses listed in if_mention, whitespace removed."""
        return [c.strip() for c in self.if_mention.split(",") if c.strip()]

    @property
    def requested_fields(self) -> List[str]:
        """Field names listed in fields, whitespace removed."""
        return [f for f in self.fields.replace(" ", "").split(",") if f]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: Optional[LogFormat] = Field(
        None, description="Log output format (json, key-value or github); auto-detected when unset"
    )

    model_config = {"use_enum_values": True}


class AdvancedConfig(BaseModel):
    """HTTP client settings shared by the GitHub and Slack clients."""

    http_request_timeout: int = Field(
        30, ge=5, le=300, description="Request timeout for API calls (seconds)"
    )
    user_agent: str = Field(
        "WorkflowNotifier/1.0",
        min_length=1,
        description="User-Agent string for HTTP requests",
    )

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        """Strip whitespace from user agent."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object for one notifier invocation."""

    inputs: NotifyInput = Field(..., description="Notification inputs")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    advanced: AdvancedConfig = Field(
        default_factory=AdvancedConfig, description="HTTP client settings"
    )

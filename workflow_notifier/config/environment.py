"""Credential and endpoint loading from environment variables."""

import os
from typing import Mapping, Optional

from .exceptions import ConfigurationError

DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_SLACK_API_URL = "https://slack.com/api"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        github_token: str,
        slack_token: str,
        log_level: Optional[str] = None,
        github_api_url: Optional[str] = None,
        slack_api_url: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.github_token = github_token
        self.slack_token = slack_token
        self.log_level = log_level
        self.github_api_url = (github_api_url or DEFAULT_GITHUB_API_URL).rstrip("/")
        self.slack_api_url = (slack_api_url or DEFAULT_SLACK_API_URL).rstrip("/")

    def __repr__(self) -> str:
        # Tokens stay out of reprs so they never reach a log line.
        return (
            f"EnvironmentConfig(github_api_url={self.github_api_url!r}, "
            f"slack_api_url={self.slack_api_url!r}, log_level={self.log_level!r})"
        )


def load_environment_config(environ: Optional[Mapping[str, str]] = None) -> EnvironmentConfig:
    """
    Load and validate credentials and endpoints from the environment.

    Tokens are looked up first under the GitHub Actions input name and then
    under the conventional variable name:

    - INPUT_GITHUB_TOKEN or GITHUB_TOKEN: token for the GitHub REST API
    - INPUT_SLACK_TOKEN or SLACK_TOKEN: bot token for the Slack Web API

    Optional environment variables:
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - GITHUB_API_URL: GitHub REST API base URL (default: https://api.github.com)
    - SLACK_API_URL: Slack Web API base URL (default: https://slack.com/api)

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a token is missing or LOG_LEVEL is invalid
    """
    env = os.environ if environ is None else environ
    errors = []

    github_token = env.get("INPUT_GITHUB_TOKEN") or env.get("GITHUB_TOKEN")
    slack_token = env.get("INPUT_SLACK_TOKEN") or env.get("SLACK_TOKEN")
    log_level = env.get("LOG_LEVEL") or None

    if not github_token:
        errors.append("Missing required input: github_token (INPUT_GITHUB_TOKEN or GITHUB_TOKEN)")

    if not slack_token:
        errors.append("Missing required input: slack_token (INPUT_SLACK_TOKEN or SLACK_TOKEN)")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Pass github_token and slack_token as action inputs",
                "Or export GITHUB_TOKEN and SLACK_TOKEN (a .env file is also read)",
            ],
        )

    return EnvironmentConfig(
        github_token=github_token,
        slack_token=slack_token,
        log_level=log_level.upper() if log_level else None,
        github_api_url=env.get("GITHUB_API_URL"),
        slack_api_url=env.get("SLACK_API_URL"),
    )

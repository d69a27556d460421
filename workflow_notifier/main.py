"""Command-line entry point for the workflow notifier."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from workflow_notifier.config.environment import VALID_LOG_LEVELS
from workflow_notifier.config.exceptions import ConfigurationError
from workflow_notifier.config.loader import INPUT_NAMES, load_config
from workflow_notifier.github import ActionContext, GitHubClient, GitHubError
from workflow_notifier.logging import get_logger
from workflow_notifier.logging.config import configure_logging, resolve_log_format
from workflow_notifier.notifications import (
    NotificationError,
    NotificationService,
    SlackClient,
)

logger = get_logger(__name__, component="cli")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; every input also has a --flag form."""
    parser = argparse.ArgumentParser(
        prog="workflow-notifier",
        description="Post a GitHub Actions job status message to Slack",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: notifier.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=VALID_LOG_LEVELS,
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the message payload as JSON instead of posting it",
    )

    for name in INPUT_NAMES:
        parser.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            default=None,
            help=f"Value of the '{name}' input (overrides INPUT_{name.upper()})",
        )

    return parser


def _input_overrides(args: argparse.Namespace) -> Dict[str, Optional[str]]:
    return {name: getattr(args, name) for name in INPUT_NAMES}


def _environment_label() -> str:
    if os.environ.get("GITHUB_ACTIONS") == "true":
        return "github-actions"
    return os.environ.get("ENVIRONMENT", "local")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the workflow notifier.

    Returns:
        Exit code (0 for success, 1 for any failure).
    """
    args = build_parser().parse_args(argv)

    # Configure logging from the environment first so configuration errors
    # and warnings are reported in the right format.
    early_level = args.log_level or (os.environ.get("LOG_LEVEL") or "INFO").upper()
    if early_level not in VALID_LOG_LEVELS:
        early_level = "INFO"
    configure_logging(
        level=early_level,
        format_type=resolve_log_format(),
        environment=_environment_label(),
    )

    try:
        app_config, env_config = load_config(args.config, overrides=_input_overrides(args))

        # Log level priority: CLI > environment > config file
        log_level = args.log_level or env_config.log_level or app_config.logging.level
        configure_logging(
            level=log_level,
            format_type=resolve_log_format(app_config.logging.format),
            environment=_environment_label(),
        )

        inputs = app_config.inputs
        for name in INPUT_NAMES:
            logger.debug(f"{name}: {getattr(inputs, name)}")

        context = ActionContext.from_env()

        advanced = app_config.advanced
        github_client = GitHubClient(
            env_config.github_token,
            api_url=env_config.github_api_url,
            timeout=advanced.http_request_timeout,
            user_agent=advanced.user_agent,
        )
        slack_client = SlackClient(
            env_config.slack_token,
            api_url=env_config.slack_api_url,
            timeout=advanced.http_request_timeout,
            user_agent=advanced.user_agent,
        )
        service = NotificationService(github_client, slack_client)

        if args.dry_run:
            payload = service.build_payload(inputs, context)
            print(json.dumps(payload.to_dict(), indent=2, ensure_ascii=False))
            return 0

        service.notify(inputs, context)
        return 0

    except ConfigurationError as e:
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except (NotificationError, GitHubError) as e:
        logger.error(
            str(e),
            extra={"event": "notification.failed", "error_type": type(e).__name__},
        )
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 1
    except Exception as e:
        logger.critical(
            f"Unexpected error: {e}",
            extra={"event": "notification.failed", "error_type": type(e).__name__},
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())

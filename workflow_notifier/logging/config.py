"""Logging configuration for the workflow notifier."""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Mapping, Optional

from .context import get_log_context

LogFormat = Literal["json", "key-value", "github"]

SERVICE_NAME = "workflow-notifier"


class ContextualFilter(logging.Filter):
    """Filter that enriches log records with static metadata and active context.

    Adds the static service and environment fields, then any field pushed with
    log_context() that the record does not already carry.
    """

    def __init__(self, service: str = SERVICE_NAME, environment: str = "local"):
        """Initialize contextual filter.

        Args:
            service: Service name (static field)
            environment: Environment label (github-actions, local, ...)
        """
        super().__init__()
        self.service = service
        self.environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        record.environment = self.environment

        for key, value in get_log_context().items():
            if not hasattr(record, key):
                setattr(record, key, value)

        return True


class JSONFormatter(logging.Formatter):
    """Single-line JSON formatter with stable field names."""

    STANDARD_ATTRS = {
        "name", "msg", "args", "created", "filename", "funcName", "levelname",
        "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
        "processName", "relativeCreated", "thread", "threadName", "asctime",
        "exc_info", "exc_text", "stack_info", "taskName"
    }

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": self._format_timestamp(record.created),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key in self.STANDARD_ATTRS or key.startswith("_"):
                continue
            if isinstance(value, datetime):
                log_obj[key] = value.isoformat()
            elif isinstance(value, (str, int, float, bool, type(None), list, dict)):
                log_obj[key] = value
            else:
                log_obj[key] = str(value)

        if record.exc_info:
            log_obj["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False, default=str)

    def _format_timestamp(self, created: float) -> str:
        """Format a record timestamp as ISO-8601 UTC with millisecond precision."""
        dt = datetime.fromtimestamp(created, tz=timezone.utc)
        return dt.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class KeyValueFormatter(logging.Formatter):
    """Key-value formatter for human-readable logs.

    Produces logs in format:
    timestamp [level] logger: message key1=value1 key2=value2
    """

    SKIP_ATTRS = {
        "name", "msg", "args", "created", "filename", "funcName", "levelname",
        "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
        "processName", "relativeCreated", "thread", "threadName", "asctime",
        "exc_info", "exc_text", "stack_info", "taskName", "service", "environment"
    }

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)

        extras = []
        for key, value in sorted(record.__dict__.items()):
            if key in self.SKIP_ATTRS or key.startswith("_"):
                continue
            extras.append(f"{key}={_format_value(value)}")

        if extras:
            return f"{base} {' '.join(extras)}"
        return base


class GitHubActionsFormatter(logging.Formatter):
    """Formatter that renders records as GitHub Actions workflow commands.

    DEBUG records become ::debug:: lines (shown only when step debug logging
    is enabled), WARNING becomes ::warning:: and ERROR/CRITICAL ::error::, so
    they surface as annotations on the run. INFO is printed as is.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        if record.levelno >= logging.ERROR:
            return f"::error::{escape_workflow_data(message)}"
        if record.levelno >= logging.WARNING:
            return f"::warning::{escape_workflow_data(message)}"
        if record.levelno <= logging.DEBUG:
            return f"::debug::{escape_workflow_data(message)}"
        return message


def escape_workflow_data(data: str) -> str:
    """Escape a workflow command payload the way the Actions runner expects."""
    return data.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        if " " in value or "=" in value or "," in value:
            return f'"{value}"'
        return value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, bool):
        return str(value).lower()
    if value is None:
        return "null"
    return str(value)


def resolve_log_format(
    configured: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
) -> str:
    """Pick the log format: explicit setting first, else github under Actions.

    Args:
        configured: Format from the config file, if any
        environ: Environment to inspect (defaults to os.environ)

    Returns:
        One of 'json', 'key-value' or 'github'
    """
    if configured:
        return configured
    env = os.environ if environ is None else environ
    if env.get("GITHUB_ACTIONS") == "true":
        return "github"
    return "key-value"


def configure_logging(
    level: str = "INFO",
    format_type: LogFormat = "key-value",
    environment: str = "local",
) -> None:
    """
    Configure the root logger with the specified level and format.

    Also routes warnings.warn() output (configuration warnings) into logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'json', 'key-value' or 'github'
        environment: Environment label (github-actions, local, ...)

    Raises:
        ValueError: If level or format_type is invalid
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    if format_type not in ("json", "key-value", "github"):
        raise ValueError(
            f"Invalid log format: {format_type}. Must be 'json', 'key-value' or 'github'"
        )

    handler = logging.StreamHandler(sys.stdout)

    if format_type == "json":
        formatter = JSONFormatter()
    elif format_type == "github":
        formatter = GitHubActionsFormatter()
    else:
        formatter = KeyValueFormatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    handler.addFilter(ContextualFilter(service=SERVICE_NAME, environment=environment))

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logging.captureWarnings(True)

    logging.getLogger(__name__).debug(
        "Logging configured",
        extra={
            "event": "logging.configured",
            "component": "logging",
            "log_level": level.upper(),
            "log_format": format_type,
        },
    )

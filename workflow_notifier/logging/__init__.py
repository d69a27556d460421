"""Structured logging helpers for the workflow notifier."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges the component field with per-call extras."""

    def process(self, msg, kwargs):
        """Merge adapter extra into the call's extra; the call wins on conflicts."""
        extra = kwargs.get("extra", {})
        kwargs["extra"] = {**self.extra, **extra}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Get a logger that tags every record with a component name.

    Args:
        name: Logger name (typically __name__)
        component: Optional component identifier added to all records

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="slack")
        >>> logger.info("Message posted", extra={"event": "notification.send.success"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger

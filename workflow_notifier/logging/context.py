"""Scoped fields for structured logging.

Fields pushed here are attached to every log record emitted while they are
active, e.g. the repository and run id of the workflow being reported on.
Backed by contextvars, so each thread or task sees its own fields.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active context fields."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the active context.

    Args:
        **kwargs: Fields to add

    Returns:
        Token for pop_log_context()
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the context that was active before push_log_context()."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop all context fields. Used by tests."""
    LogContextVar.set({})


class log_context:
    """Context manager that adds fields for the duration of a block.

    Example:
        >>> with log_context(repository="octo/hello", run_id="42"):
        ...     logger.info("Composing message")
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
        return False

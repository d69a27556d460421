"""Configuration management module for the workflow notifier."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import INPUT_NAMES, collect_inputs, load_config
from .models import (
    ALL_FIELDS,
    FIELD_ALIASES,
    FIELD_NAMES,
    MENTIONABLE_STATUSES,
    AdvancedConfig,
    AppConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    NotifyInput,
)

__all__ = [
    # Main loader functions
    "load_config",
    "collect_inputs",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "NotifyInput",
    "LoggingConfig",
    "AdvancedConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Constants
    "INPUT_NAMES",
    "FIELD_NAMES",
    "FIELD_ALIASES",
    "ALL_FIELDS",
    "MENTIONABLE_STATUSES",
    # Exceptions
    "ConfigurationError",
]

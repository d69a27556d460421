"""Configuration loader for the workflow notifier."""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings

# Input names as declared by the action; GitHub exposes each as INPUT_<NAME>.
INPUT_NAMES = (
    "channel",
    "status",
    "mention",
    "if_mention",
    "fields",
    "text",
    "header",
    "changelog",
    "buttons",
    "custom_blocks",
)

DEFAULT_CONFIG_CANDIDATES = (
    Path("notifier.yaml"),
    Path(".github") / "notifier.yaml",
)


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Optional[str]]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load and validate notifier configuration.

    Inputs are merged from three sources, highest precedence first:
    1. overrides (CLI flags); None values are skipped
    2. INPUT_<NAME> environment variables; empty values are skipped
    3. the 'inputs' section of the YAML config file, if one is found

    Args:
        config_path: Optional path to a YAML configuration file
        overrides: Input values given on the command line
        environ: Mapping to read environment variables from (defaults to os.environ)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with validated configuration

    Raises:
        ConfigurationError: If configuration is invalid or credentials are missing
    """
    env = os.environ if environ is None else environ

    config_file = _find_config_file(config_path)
    file_config = _read_config_file(config_file) if config_file else {}

    file_inputs = file_config.get("inputs") or {}
    if not isinstance(file_inputs, dict):
        raise ConfigurationError(
            f"Invalid 'inputs' section in {config_file}: expected a mapping",
            suggestions=["List inputs as 'name: value' pairs under 'inputs:'"],
        )

    inputs = collect_inputs(file_inputs, env, overrides or {})

    warnings = check_for_warnings(inputs)
    if warnings:
        emit_warnings(warnings)

    try:
        app_config = AppConfig.model_validate(
            {
                "inputs": inputs,
                "logging": file_config.get("logging") or {},
                "advanced": file_config.get("advanced") or {},
            }
        )
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            error_msg = error["msg"]
            error_type = error["type"]

            if error_type == "missing":
                errors.append(f"Missing required input: {field_path}")
            elif error_type in ["string_type", "int_type", "bool_type"]:
                expected_type = error_type.replace("_type", "")
                errors.append(
                    f"Invalid type for '{field_path}': expected {expected_type}, got {error.get('input')}"
                )
            elif "enum" in error_type:
                errors.append(f"Invalid value for '{field_path}': {error_msg}")
            else:
                # Model-level errors have an empty location
                errors.append(f"{field_path}: {error_msg}" if field_path else error_msg)

        raise ConfigurationError(
            "Configuration validation failed",
            errors=errors,
            suggestions=[
                "Set 'channel' and 'status' inputs",
                "Provide at least one of 'header', 'text' or 'custom_blocks'",
            ],
        )

    env_config = load_environment_config(env)

    return app_config, env_config


def collect_inputs(
    file_inputs: Mapping[str, Any],
    environ: Mapping[str, str],
    overrides: Mapping[str, Optional[str]],
) -> Dict[str, str]:
    """Merge input values from file, environment and CLI.

    Args:
        file_inputs: Values from the YAML 'inputs' section
        environ: Environment variables
        overrides: CLI values

    Returns:
        Dictionary holding only the inputs that were given somewhere
    """
    merged: Dict[str, str] = {}

    for name in INPUT_NAMES:
        value = file_inputs.get(name)
        if value is not None:
            # YAML scalars such as numbers or booleans are passed through as text
            merged[name] = value if isinstance(value, str) else str(value)

        env_value = environ.get(_env_name(name))
        if env_value:
            merged[name] = env_value

        override = overrides.get(name)
        if override is not None:
            merged[name] = override

    return merged


def _env_name(input_name: str) -> str:
    """Name of the environment variable GitHub Actions uses for an input."""
    return "INPUT_" + input_name.replace(" ", "_").upper()


def _find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    """
    Locate the optional YAML configuration file.

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Path to configuration file, or None when no default file exists

    Raises:
        ConfigurationError: If an explicit path does not exist
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Omit --config to rely on INPUT_* environment variables",
                ],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_CANDIDATES:
        if candidate.exists():
            return candidate

    return None


def _read_config_file(config_file: Path) -> Dict[str, Any]:
    """Read and parse the YAML configuration file."""
    try:
        with open(config_file, "r") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[
                f"Ensure {config_file} is readable",
                "Check file permissions",
            ],
        )

    if config_dict is None:
        return {}

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration file {config_file} must contain a mapping at the top level",
            suggestions=["Use 'inputs:', 'logging:' and 'advanced:' sections"],
        )

    return config_dict

"""
Configuration loader for Skilo.

Loads and merges configuration from multiple sources:
1. Default values
2. Global config (~/.skilo/config.yaml)
3. Project config (--config path, or .skilo.yaml / skilo.yaml / .skilo/config.yaml)
4. Environment variables (SKILO_<SECTION>__<KEY>)
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from skilo.config.merger import deep_merge, set_nested_value
from skilo.config.schema import Config
from skilo.errors import ConfigurationError
from skilo.storage.paths import find_project_config, get_global_config_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "SKILO_"
ENV_SEPARATOR = "__"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed configuration dictionary (empty if the file is missing or empty).

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Invalid config in {path}: top level must be a mapping")
    return content


def save_yaml_file(path: Path, config: dict[str, Any]) -> None:
    """
    Save a configuration dictionary to a YAML file.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    except OSError as e:
        raise ConfigurationError(f"Cannot write {path}: {e}") from e


def apply_env_overrides(config: dict[str, Any], environ: dict[str, str] | None = None) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Variables follow the pattern ``SKILO_<SECTION>__<KEY>``, with a double
    underscore separating nesting levels, e.g. ``SKILO_LINT__STRICT=true`` or
    ``SKILO_LINT__RULES__BODY_LENGTH=300``. Variables without a separator
    (SKILO_HOME, SKILO_OFFLINE, SKILO_CONFIG) are not config keys.

    Args:
        config: Configuration dictionary to modify.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Configuration with environment overrides applied.
    """
    environ = os.environ if environ is None else environ

    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        name = key[len(ENV_PREFIX) :]
        if ENV_SEPARATOR not in name:
            continue

        path = [part.lower() for part in name.split(ENV_SEPARATOR) if part]
        if not path:
            continue

        logger.debug(f"Config override from environment: {key}")
        config = set_nested_value(config, path, parse_value(value))

    return config


def parse_value(value: str) -> Any:
    """Parse a string from the environment or the command line into bool, int, list or str."""
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    if re.match(r"^\d+$", value):
        return int(value)

    if "," in value:
        return [item.strip() for item in value.split(",") if item.strip()]

    return value


def load_config(
    config_path: Path | None = None,
    project_path: Path | None = None,
    skip_global: bool = False,
    skip_env: bool = False,
) -> Config:
    """
    Load and merge configuration from all sources.

    Args:
        config_path: Explicit project config file. Must exist when given.
        project_path: Directory searched for a project config. Defaults to cwd.
        skip_global: Skip the global config file.
        skip_env: Skip environment variable overrides.

    Returns:
        Merged and validated Config object.

    Raises:
        ConfigurationError: If a config file is unreadable or invalid.
    """
    config_dict = Config().model_dump()

    if not skip_global:
        global_path = get_global_config_path()
        if global_path.exists():
            logger.debug(f"Loading global config: {global_path}")
            config_dict = deep_merge(config_dict, load_yaml_file(global_path))

    if config_path is not None:
        if not config_path.is_file():
            raise ConfigurationError(f"Config file not found: {config_path}")
        project_config_path: Path | None = config_path
    else:
        project_config_path = find_project_config(project_path)

    if project_config_path is not None:
        logger.debug(f"Loading project config: {project_config_path}")
        config_dict = deep_merge(config_dict, load_yaml_file(project_config_path))

    if not skip_env:
        config_dict = apply_env_overrides(config_dict)

    try:
        return Config.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


def get_config_sources(config_path: Path | None = None) -> dict[str, Path | None]:
    """
    Get paths to all configuration sources that exist.

    Returns:
        Dictionary mapping source names to paths (None if not found).
    """
    global_path = get_global_config_path()
    project = config_path if config_path is not None else find_project_config()

    return {
        "global": global_path if global_path.exists() else None,
        "project": project if project is not None and project.exists() else None,
    }

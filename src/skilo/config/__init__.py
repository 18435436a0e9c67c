"""
Skilo configuration module.

Layered YAML configuration validated with pydantic.
"""

from skilo.config.loader import (
    apply_env_overrides,
    get_config_sources,
    load_config,
    load_yaml_file,
    parse_value,
    save_yaml_file,
)
from skilo.config.merger import deep_merge, get_nested_value, set_nested_value
from skilo.config.schema import (
    AddConfig,
    Config,
    DiscoveryConfig,
    FmtConfig,
    LintConfig,
    NewConfig,
    RulesConfig,
    Threshold,
)
from skilo.errors import ConfigurationError

__all__ = [
    # Schema
    "AddConfig",
    "Config",
    "DiscoveryConfig",
    "FmtConfig",
    "LintConfig",
    "NewConfig",
    "RulesConfig",
    "Threshold",
    # Loader
    "ConfigurationError",
    "apply_env_overrides",
    "get_config_sources",
    "load_config",
    "load_yaml_file",
    "parse_value",
    "save_yaml_file",
    # Merger
    "deep_merge",
    "get_nested_value",
    "set_nested_value",
]

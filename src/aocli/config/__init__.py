"""Configuration loading."""

from aocli.config.loader import (
    SESSION_ENV,
    find_local_config_path,
    get_home_config_path,
    get_local_config_path,
    load_config,
    save_config,
)
from aocli.config.schema import (
    DEFAULT_CONFIG,
    AocConfig,
    CommandsConfig,
    ConfigError,
    FormatsConfig,
)

__all__ = [
    "DEFAULT_CONFIG",
    "SESSION_ENV",
    "AocConfig",
    "CommandsConfig",
    "ConfigError",
    "FormatsConfig",
    "find_local_config_path",
    "get_home_config_path",
    "get_local_config_path",
    "load_config",
    "save_config",
]

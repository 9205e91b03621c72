"""Configuration file loading and merging."""

import logging
import os
from pathlib import Path

import yaml

from aocli.config.schema import DEFAULT_CONFIG, AocConfig

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".aocli"
CONFIG_FILENAME = "config.yaml"
SESSION_ENV = "AOC_SESSION"


def get_home_config_path() -> Path:
    """Get path to global config: ~/.aocli/config.yaml."""
    return Path.home() / CONFIG_DIRNAME / CONFIG_FILENAME


def find_local_config_path(start: Path | None = None) -> Path | None:
    """Find the nearest .aocli/config.yaml at or above ``start``.

    The global config directory is skipped so it is never read twice.
    """
    start = start or Path.cwd()
    home_path = get_home_config_path()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_DIRNAME / CONFIG_FILENAME
        if candidate == home_path:
            continue
        if candidate.is_file():
            return candidate
    return None


def get_local_config_path() -> Path:
    """Get path to local config: nearest existing one, else ./.aocli/config.yaml."""
    return find_local_config_path() or Path.cwd() / CONFIG_DIRNAME / CONFIG_FILENAME


def load_yaml_config(path: Path) -> dict[str, object] | None:
    """Load a YAML config file, return None if not found or empty."""
    if not path.exists():
        return None
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        return None
    result: dict[str, object] = data
    return result


def load_config(cwd: Path | None = None) -> AocConfig:
    """Load merged configuration.

    Precedence (lowest to highest):
    1. Built-in defaults
    2. Global config (~/.aocli/config.yaml)
    3. Local config (nearest .aocli/config.yaml at or above cwd)
    4. AOC_SESSION environment variable (session only)
    """
    config = DEFAULT_CONFIG

    home_path = get_home_config_path()
    home_data = load_yaml_config(home_path)
    if home_data:
        logger.debug("Loaded global config %s", home_path)
        config = config.merge(AocConfig.from_dict(home_data))

    local_path = find_local_config_path(cwd)
    if local_path is not None:
        local_data = load_yaml_config(local_path)
        if local_data:
            logger.debug("Loaded local config %s", local_path)
            config = config.merge(AocConfig.from_dict(local_data))

    session = os.environ.get(SESSION_ENV)
    if session:
        config = config.merge(AocConfig(session=session.strip()))

    return config


def save_config(config: AocConfig, path: Path) -> None:
    """Save config to a YAML file.

    Creates parent directories if needed. The session cookie is never
    written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.to_dict()
    data.pop("session", None)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

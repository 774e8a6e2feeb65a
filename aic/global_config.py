"""Global configuration management for aic.

Handles user-level configuration stored in ~/.config/aic/config.yaml
(%USERPROFILE%\\AppData\\Roaming\\aic\\config.yaml on Windows).
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from aic.config import DEFAULT_CONFIG, ConfigError, validate_key

logger = logging.getLogger(__name__)


class GlobalConfigError(ConfigError):
    """Raised when the global config file cannot be read or written."""

    pass


def _default_config_dir() -> Path:
    if os.name == "nt":
        return Path.home() / "AppData" / "Roaming" / "aic"
    return Path.home() / ".config" / "aic"


_CONFIG_DIR = _default_config_dir()


def get_global_config_dir() -> Path:
    """Get the global aic configuration directory.

    Returns:
        Path to ~/.config/aic/
    """
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Create the global config directory if it is missing.

    Returns:
        Path to ~/.config/aic/
    """
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    """Get the path of the global config file.

    Returns:
        Path to ~/.config/aic/config.yaml
    """
    return get_global_config_dir() / "config.yaml"


def read_global_config() -> Dict[str, Any]:
    """Read the global config file without creating it.

    Returns:
        The parsed mapping, or an empty dict when the file is absent.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Could not read global config {config_file}: {e}")

    if not isinstance(config, dict):
        raise GlobalConfigError(f"Invalid config in {config_file}: expected a mapping of keys to values")
    return config


def load_global_config() -> Dict[str, Any]:
    """Load global configuration, creating it with defaults on first use.

    Returns:
        Dictionary with configuration values.
    """
    if not is_configured():
        initialize_default_config()
        return dict(DEFAULT_CONFIG)

    return read_global_config()


def save_global_config(config: Dict[str, Any]) -> None:
    """Save global configuration to ~/.config/aic/config.yaml.

    Args:
        config: Mapping of configuration keys to values.
    """
    ensure_global_config_dir()
    config_file = get_config_file_path()

    try:
        with open(config_file, "w", encoding="utf-8") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Could not write global config {config_file}: {e}")

    logger.debug("Saved global config to %s", config_file)


def get_global_value(key: str) -> Optional[str]:
    """Get a single value from the global config.

    Args:
        key: Configuration key name.

    Returns:
        The stored value, or None if not set.
    """
    return load_global_config().get(validate_key(key))


def set_global_value(key: str, value: Optional[str]) -> None:
    """Set (or, with value None, remove) a single key in the global config.

    Args:
        key: Configuration key name.
        value: New value, or None to unset.
    """
    validate_key(key)
    config = load_global_config()
    if value is None:
        config.pop(key, None)
    else:
        config[key] = value
    save_global_config(config)


def initialize_default_config() -> None:
    """Write the default settings to the global config file unless it already exists."""
    config_file = get_config_file_path()

    if config_file.exists():
        return

    logger.debug("Creating default global config at %s", config_file)
    save_global_config(dict(DEFAULT_CONFIG))


def is_configured() -> bool:
    """Check if the global config file exists.

    Returns:
        Whether the global config file is present.
    """
    return get_config_file_path().exists()

"""Project configuration management for aic.

A project may carry a .aic.yaml file that overrides global settings. The
file is searched for from the working directory upwards, stopping at the
repository root (the first directory containing .git) or at the filesystem
root.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from aic.config import ConfigError, validate_key

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILENAME = ".aic.yaml"


class ProjectConfigError(ConfigError):
    """Raised when there's an error with a project configuration file."""

    pass


def find_project_config(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest project config file.

    Args:
        start_dir: Directory to start searching from. Defaults to the
            current working directory.

    Returns:
        Path to the project config file, or None if there is none between
        start_dir and the repository root.
    """
    directory = (start_dir or Path.cwd()).resolve()

    while True:
        candidate = directory / PROJECT_CONFIG_FILENAME
        if candidate.is_file():
            logger.debug("Found project config at %s", candidate)
            return candidate

        # Do not look above the repository root
        if (directory / ".git").exists():
            return None

        parent = directory.parent
        if parent == directory:
            return None
        directory = parent


def load_project_config(path: Path) -> Dict[str, Any]:
    """Load a project config file.

    Args:
        path: Path to the .aic.yaml file.

    Returns:
        Dictionary with configuration values (empty if the file is empty).

    Raises:
        ProjectConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ProjectConfigError(f"Failed to load project config from {path}: {e}")

    if not isinstance(config, dict):
        raise ProjectConfigError(f"Invalid project config in {path}: expected a mapping of keys to values")
    return config


def save_project_config(path: Path, config: Dict[str, Any]) -> None:
    """Save a project config file.

    Args:
        path: Path to the .aic.yaml file.
        config: Configuration dictionary to save.
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    except (OSError, yaml.YAMLError) as e:
        raise ProjectConfigError(f"Failed to save project config to {path}: {e}")


def set_project_value(path: Path, key: str, value: Optional[str]) -> None:
    """Set (or, with value None, remove) a single key in a project config.

    The file is created if it does not exist yet.

    Args:
        path: Path to the .aic.yaml file.
        key: Configuration key name.
        value: New value, or None to unset.
    """
    validate_key(key)
    config = load_project_config(path) if path.exists() else {}
    if value is None:
        config.pop(key, None)
    else:
        config[key] = value
    save_project_config(path, config)

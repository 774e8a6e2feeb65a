"""Configuration model and layered resolution for aic.

Settings live in two YAML files:
- the global config (~/.config/aic/config.yaml), see aic.global_config
- an optional project config (.aic.yaml), see aic.project_config

The project config is merged over the global one field by field. Use
'aic config' commands to modify settings.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from aic.prompts import DEFAULT_SYSTEM_PROMPT, DEFAULT_USER_PROMPT

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a configuration file cannot be read, parsed or written."""

    pass


# ============================================================
# DEFAULT VALUES
# ============================================================

DEFAULT_API_BASE_URL = "https://api.openai.com"
DEFAULT_MODEL = "gpt-3.5-turbo"

CONFIG_KEYS = (
    "api_token",
    "api_base_url",
    "model",
    "system_prompt",
    "user_prompt",
    "editor",
)

# Written to the global config file the first time it is loaded
DEFAULT_CONFIG = {
    "api_base_url": DEFAULT_API_BASE_URL,
    "model": DEFAULT_MODEL,
    "system_prompt": DEFAULT_SYSTEM_PROMPT,
    "user_prompt": DEFAULT_USER_PROMPT,
}

SOURCE_DEFAULT = "default"
SOURCE_GLOBAL = "global"
SOURCE_PROJECT = "project"


def validate_key(key: str) -> str:
    """Check that a configuration key is known.

    Args:
        key: The configuration key.

    Returns:
        The key, unchanged.

    Raises:
        ConfigError: If the key is not a known configuration key.
    """
    if key not in CONFIG_KEYS:
        raise ConfigError(
            f"Unknown configuration key: {key}\n"
            f"Valid keys: {', '.join(CONFIG_KEYS)}"
        )
    return key


class Config(BaseModel):
    """Flat key-value settings for aic.

    Every field is optional so the same model describes the global file, a
    partial project override, and the merged result. Use the get_* helpers to
    read a value with its built-in default applied.
    """

    model_config = ConfigDict(extra="ignore")

    api_token: Optional[str] = None
    api_base_url: Optional[str] = None
    model: Optional[str] = None
    system_prompt: Optional[str] = None
    user_prompt: Optional[str] = None
    editor: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_unset(cls, v: Any) -> Any:
        """Treat empty strings as unset values."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_dict(cls, data: dict, source: str = "config") -> "Config":
        """Build a Config from a parsed YAML mapping.

        Args:
            data: Parsed mapping (may be empty).
            source: Description of where the data came from, for error messages.

        Returns:
            A validated Config.

        Raises:
            ConfigError: If the data is not a mapping or a value has the wrong type.
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid configuration in {source}: expected a mapping of keys to values")
        bad_keys = [k for k in data if not isinstance(k, str)]
        if bad_keys:
            raise ConfigError(f"Invalid configuration in {source}: keys must be strings, got {bad_keys!r}")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {source}:\n{e}")

    def to_dict(self) -> dict:
        """Return the set values only, in key order."""
        return self.model_dump(exclude_none=True)

    def get(self, key: str) -> Optional[str]:
        """Get a raw configuration value by key name (None if unset)."""
        return getattr(self, validate_key(key))

    def with_value(self, key: str, value: Optional[str]) -> "Config":
        """Return a copy with one key set (or unset when value is None)."""
        data = self.model_dump()
        data[validate_key(key)] = value
        return Config(**data)

    def merged_with(self, override: "Config") -> "Config":
        """Return a copy where every value set in override takes precedence."""
        return self.model_copy(update=override.to_dict())

    def get_api_token(self) -> Optional[str]:
        return self.api_token

    def get_api_base_url(self) -> str:
        return self.api_base_url or DEFAULT_API_BASE_URL

    def get_model(self) -> str:
        return self.model or DEFAULT_MODEL

    def get_system_prompt(self) -> str:
        return self.system_prompt or DEFAULT_SYSTEM_PROMPT

    def get_user_prompt(self) -> str:
        return self.user_prompt or DEFAULT_USER_PROMPT

    def get_effective(self, key: str) -> Optional[str]:
        """Get a value by key name with the built-in default applied."""
        validate_key(key)
        getter = getattr(self, f"get_{key}", None)
        if getter is None:
            return getattr(self, key)
        return getter()


def merge_configs(base: Config, override: Config) -> Config:
    """Merge two configs, with override taking precedence field by field.

    Args:
        base: The lower-priority config (global).
        override: The higher-priority config (project).

    Returns:
        The merged config.
    """
    return base.merged_with(override)


@dataclass
class ConfigLayers:
    """The global config and the optional project config it is merged with."""

    global_config: Config
    project_config: Optional[Config] = None
    project_path: Optional[Path] = None

    def merged(self) -> Config:
        if self.project_config is None:
            return self.global_config
        return merge_configs(self.global_config, self.project_config)

    def source_of(self, key: str) -> str:
        """Name the layer that provides the effective value of a key."""
        validate_key(key)
        if self.project_config is not None and self.project_config.get(key) is not None:
            return SOURCE_PROJECT
        if self.global_config.get(key) is not None:
            return SOURCE_GLOBAL
        return SOURCE_DEFAULT


def load_config_layers(start_dir: Optional[Path] = None) -> ConfigLayers:
    """Load the global config and, if one is found, the project config.

    Args:
        start_dir: Directory to start the project config search from.
            Defaults to the current working directory.

    Returns:
        The loaded ConfigLayers.

    Raises:
        ConfigError: If a config file cannot be read or parsed.
    """
    # Import here to avoid circular dependency
    from aic import global_config, project_config

    global_cfg = Config.from_dict(
        global_config.load_global_config(),
        str(global_config.get_config_file_path()),
    )

    project_path = project_config.find_project_config(start_dir)
    if project_path is None:
        logger.debug("No project config found; using global config only")
        return ConfigLayers(global_config=global_cfg)

    logger.debug("Merging project config from %s", project_path)
    project_cfg = Config.from_dict(
        project_config.load_project_config(project_path),
        str(project_path),
    )
    return ConfigLayers(
        global_config=global_cfg,
        project_config=project_cfg,
        project_path=project_path,
    )


def load_config(start_dir: Optional[Path] = None) -> Config:
    """Load the effective configuration (project merged over global).

    Args:
        start_dir: Directory to start the project config search from.

    Returns:
        The merged Config.
    """
    return load_config_layers(start_dir).merged()

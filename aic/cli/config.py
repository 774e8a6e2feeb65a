"""CLI commands for configuration management."""

from pathlib import Path
from typing import Optional

import typer

from aic import global_config, project_config
from aic.cli.utils import mask_token, truncate_for_display
from aic.config import CONFIG_KEYS, ConfigError, load_config, load_config_layers, validate_key
from aic.git import GitError, get_repo_root

# Keys whose values are shortened in listings
PROMPT_KEYS = ("system_prompt", "user_prompt")

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage aic configuration (global and per-project)",
    add_completion=False,
)


def _display_value(key: str, value: Optional[str]) -> str:
    if key == "api_token":
        return mask_token(value)
    if key in PROMPT_KEYS:
        return truncate_for_display(value)
    return "<not set>" if value is None else value


def _project_config_target() -> Path:
    """Get the project config file that --project writes to.

    Uses the nearest existing .aic.yaml, or a new one at the repository root.
    """
    existing = project_config.find_project_config()
    if existing:
        return existing
    return get_repo_root() / project_config.PROJECT_CONFIG_FILENAME


def _set_value(key: str, value: Optional[str], project: bool) -> Path:
    if project:
        path = _project_config_target()
        project_config.set_project_value(path, key, value)
        return path
    global_config.set_global_value(key, value)
    return global_config.get_config_file_path()


@config_app.command("get")
def config_get(
    key: str = typer.Argument(..., help=f"Configuration key ({', '.join(CONFIG_KEYS)})"),
) -> None:
    """Get the effective value of a configuration key."""
    try:
        value = load_config().get_effective(key)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if value is None:
        typer.echo(f"{key}: <not set>")
    else:
        typer.echo(f"{key}: {value}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help=f"Configuration key ({', '.join(CONFIG_KEYS)})"),
    value: Optional[str] = typer.Argument(None, help="Value to set (omit to unset)"),
    project: bool = typer.Option(
        False,
        "--project",
        help="Write to the project config (.aic.yaml) instead of the global config",
    ),
) -> None:
    """Set a configuration value."""
    try:
        validate_key(key)
        path = _set_value(key, value, project)
    except (ConfigError, GitError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if value is None:
        typer.echo(f"✓ Unset {key} in {path}")
    else:
        typer.echo(f"✓ Set {key} to: {_display_value(key, value)}")


@config_app.command("unset")
def config_unset(
    key: str = typer.Argument(..., help=f"Configuration key ({', '.join(CONFIG_KEYS)})"),
    project: bool = typer.Option(
        False,
        "--project",
        help="Remove from the project config (.aic.yaml) instead of the global config",
    ),
) -> None:
    """Remove a configuration value so the default (or global value) applies."""
    try:
        validate_key(key)
        path = _set_value(key, None, project)
    except (ConfigError, GitError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Unset {key} in {path}")


@config_app.command("setup")
def config_setup(
    api_token: Optional[str] = typer.Option(None, "--api-token", help="API token for authentication"),
    api_base_url: Optional[str] = typer.Option(
        None, "--api-base-url", help="Base URL for the OpenAI-compatible API"
    ),
    model: Optional[str] = typer.Option(
        None, "--model", help="Model to use for generating commit messages"
    ),
    system_prompt: Optional[str] = typer.Option(
        None, "--system-prompt", help="System prompt for commit message generation"
    ),
    user_prompt: Optional[str] = typer.Option(
        None, "--user-prompt", help="User prompt template; {diff} marks where the diff goes"
    ),
) -> None:
    """Set multiple global configuration values at once for quick setup."""
    updates = {
        "api_token": api_token,
        "api_base_url": api_base_url,
        "model": model,
        "system_prompt": system_prompt,
        "user_prompt": user_prompt,
    }
    updates = {key: value for key, value in updates.items() if value is not None}

    if not updates:
        typer.echo("No configuration values were provided to set.", err=True)
        typer.echo("Usage examples:")
        typer.echo("  aic config setup --api-token <TOKEN> --api-base-url <URL>")
        typer.echo("  aic config setup --model gpt-4-turbo --api-base-url https://api.openai.com")
        return

    typer.echo("Updating configuration...", err=True)
    try:
        config = global_config.load_global_config()
        config.update(updates)
        global_config.save_global_config(config)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for key, value in updates.items():
        typer.echo(f"✓ Set {key} to: {_display_value(key, value)}")
    typer.echo("Configuration updated successfully!")


@config_app.command("list")
def config_list() -> None:
    """List all configuration values and where they come from."""
    try:
        layers = load_config_layers()
    except ConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    config = layers.merged()

    typer.echo("Current configuration:")
    typer.echo()
    for key in CONFIG_KEYS:
        value = config.get_effective(key)
        source = layers.source_of(key)
        typer.echo(f"  {key:<14} {_display_value(key, value):<36}  ({source})")

    typer.echo()
    typer.echo("Configuration file locations:")
    typer.echo(f"  Global:  {global_config.get_config_file_path()}")
    typer.echo(f"  Project: {layers.project_path or '(none)'}")


@config_app.command("path")
def config_path() -> None:
    """Show the global and project configuration file paths."""
    typer.echo(f"Global:  {global_config.get_config_file_path()}")
    typer.echo(f"Project: {project_config.find_project_config() or '(none)'}")

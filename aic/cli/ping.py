"""CLI command for testing the API connection."""

from typing import Optional

import typer

from aic.config import ConfigError, load_config
from aic.llm import LLMError, MissingAPIKeyError, get_provider


def ping_command(
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model to test (overrides configuration)",
    ),
    api_base: Optional[str] = typer.Option(
        None,
        "--api-base",
        help="API base URL to test (overrides configuration)",
    ),
) -> None:
    """Test the API connection and configuration settings.

    Sends a minimal request to the configured endpoint to verify the token,
    base URL and model.
    """
    try:
        config = load_config()
        if model:
            config = config.with_value("model", model)
        if api_base:
            config = config.with_value("api_base_url", api_base)

        provider = get_provider(config)
        typer.echo("Testing API connection...", err=True)
        typer.echo(f"  Endpoint: {provider.endpoint}")
        typer.echo(f"  Model:    {provider.model}")

        result = provider.ping()

    except MissingAPIKeyError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        typer.echo(f"✗ API connection failed: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("✓ API connection successful")
    typer.echo(f"  Response: {result.message}")

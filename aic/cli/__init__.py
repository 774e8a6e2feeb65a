"""CLI entry point for aic.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from aic.cli.config import config_app
from aic.cli.generate import generate_command
from aic.cli.main import main_command
from aic.cli.ping import ping_command

# Main application
app = typer.Typer(
    name="aic",
    help="aic: AI-powered commit message generator",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("generate")(generate_command)
app.command("ping")(ping_command)

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "generate_command",
    "ping_command",
    "main_command",
]

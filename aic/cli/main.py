"""Main CLI callback: global flags and the default generate behaviour."""

from typing import Optional

import typer

from aic import __version__
from aic.cli.generate import run_generate
from aic.cli.utils import configure_logging
from aic.git import DEFAULT_MAX_DIFF_CHARS


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"aic {__version__}")
        raise typer.Exit()


def main_command(
    ctx: typer.Context,
    auto_add: bool = typer.Option(
        False,
        "--add",
        "-a",
        help="Automatically stage all changes before generating commit message",
    ),
    auto_commit: bool = typer.Option(
        False,
        "--commit",
        "-c",
        help="Execute the git commit command automatically without confirmation",
    ),
    push: bool = typer.Option(
        False,
        "--push",
        "-p",
        help="Run 'git push' after a successful commit",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model to use for this run (overrides configuration)",
    ),
    api_base: Optional[str] = typer.Option(
        None,
        "--api-base",
        help="API base URL to use for this run (overrides configuration)",
    ),
    prompt: Optional[str] = typer.Option(
        None,
        "--prompt",
        help="System prompt to use for this run (overrides configuration)",
    ),
    max_diff_chars: int = typer.Option(
        DEFAULT_MAX_DIFF_CHARS,
        "--max-diff-chars",
        min=1,
        help="Maximum characters for the staged diff",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging on stderr",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Generate an AI-powered git commit message from staged changes."""
    configure_logging(verbose)

    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    run_generate(
        auto_add=auto_add,
        auto_commit=auto_commit,
        push=push,
        model=model,
        api_base=api_base,
        prompt=prompt,
        max_diff_chars=max_diff_chars,
    )

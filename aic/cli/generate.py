"""CLI command for generating a commit message from staged changes."""

import logging
from typing import Optional

import typer

from aic.cli.workflow import execute_commit, format_commit_command, handle_commit_options
from aic.config import ConfigError, load_config
from aic.git import (
    DEFAULT_MAX_DIFF_CHARS,
    GitError,
    NoStagedChangesError,
    get_staged_diff,
    stage_all_changes,
)
from aic.llm import LLMError, MissingAPIKeyError, generate_commit_message

logger = logging.getLogger(__name__)


def run_generate(
    auto_add: bool = False,
    auto_commit: bool = False,
    push: bool = False,
    model: Optional[str] = None,
    api_base: Optional[str] = None,
    prompt: Optional[str] = None,
    max_diff_chars: int = DEFAULT_MAX_DIFF_CHARS,
) -> None:
    """Generate a commit message and run the commit workflow.

    Args:
        auto_add: Stage all changes before reading the diff.
        auto_commit: Commit without asking for confirmation.
        push: Push after a successful commit.
        model: Model override for this run.
        api_base: API base URL override for this run.
        prompt: System prompt override for this run.
        max_diff_chars: Maximum characters of diff sent to the API.
    """
    try:
        config = load_config()

        # Per-run overrides take precedence over both config files
        if model:
            config = config.with_value("model", model)
        if api_base:
            config = config.with_value("api_base_url", api_base)
        if prompt:
            config = config.with_value("system_prompt", prompt)

        if auto_add:
            typer.echo("Staging all changes...", err=True)
            stage_all_changes()

        typer.echo("Analyzing staged changes...", err=True)
        diff = get_staged_diff(max_chars=max_diff_chars)
        logger.debug("Staged diff is %d characters", len(diff))

        typer.echo(f"Using model: {config.get_model()}", err=True)
        typer.echo("Generating commit message...", err=True)
        result = generate_commit_message(diff, config)

    except NoStagedChangesError:
        typer.echo("No staged changes detected in the git repository.", err=True)
        typer.echo("Please add your changes with 'git add' first.", err=True)
        raise typer.Exit(0)
    except MissingAPIKeyError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        typer.echo(f"LLM error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("")
    typer.echo(typer.style("Commit command:", fg=typer.colors.GREEN, bold=True))
    typer.echo(format_commit_command(result.message))

    if auto_commit:
        typer.echo("")
        execute_commit(result.message, push=push)
    else:
        handle_commit_options(result.message, editor=config.editor, push=push)


def generate_command(
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
) -> None:
    """Generate a commit message based on the staged git diff.

    Make sure to stage your changes with 'git add' before running this
    command, or pass --add.
    """
    run_generate(
        auto_add=auto_add,
        auto_commit=auto_commit,
        push=push,
        model=model,
        api_base=api_base,
        prompt=prompt,
        max_diff_chars=max_diff_chars,
    )

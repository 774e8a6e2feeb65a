"""Interactive commit workflow: execute, modify in an editor, or cancel."""

import logging
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from aic.cli.utils import open_editor
from aic.git import GitError, commit_with_message, push_changes

logger = logging.getLogger(__name__)

COMMIT_PROMPT = "Execute this commit? [Y/m/n]"


class CommitAction(Enum):
    """What to do with a generated commit message."""

    EXECUTE = "execute"
    MODIFY = "modify"
    CANCEL = "cancel"
    INVALID = "invalid"


def parse_commit_choice(answer: str) -> CommitAction:
    """Map the answer to the commit prompt onto an action.

    An empty answer means yes. Only the first letter matters, so 'yes',
    'modify' and 'no' are accepted too.
    """
    answer = answer.strip().lower()
    if not answer or answer.startswith("y"):
        return CommitAction.EXECUTE
    if answer.startswith("m"):
        return CommitAction.MODIFY
    if answer.startswith("n"):
        return CommitAction.CANCEL
    return CommitAction.INVALID


def format_commit_command(message: str) -> str:
    """Render the git command that would create the commit, for display."""
    escaped = message.replace('"', '\\"')
    return f'git commit -m "{escaped}"'


def execute_commit(message: str, push: bool = False) -> None:
    """Commit the staged changes with the given message.

    Args:
        message: The commit message.
        push: Run git push after a successful commit.

    Raises:
        typer.Exit: If the commit or the push fails.
    """
    typer.echo("Executing git commit...", err=True)
    try:
        output = commit_with_message(message)
    except GitError as e:
        typer.echo("Commit failed!", err=True)
        typer.echo(str(e), err=True)
        raise typer.Exit(1)

    if output:
        typer.echo(output)
    typer.echo("Commit created successfully!", err=True)

    if push:
        push_committed_changes()


def push_committed_changes() -> None:
    """Push to the remote after a commit.

    Raises:
        typer.Exit: If git push fails.
    """
    typer.echo("Running 'git push'...", err=True)
    try:
        output = push_changes()
    except GitError as e:
        typer.echo(f"Failed to push changes: {e}", err=True)
        raise typer.Exit(1)

    if output:
        typer.echo(output)
    typer.echo("Changes pushed successfully.", err=True)


def edit_commit_message(message: str, editor: Optional[str] = None) -> str:
    """Let the user revise the commit message in an editor.

    The message is written to a temporary file which is removed afterwards.

    Args:
        message: The generated commit message.
        editor: Editor command from configuration, if any.

    Returns:
        The edited message, stripped of surrounding whitespace.

    Raises:
        typer.Exit: If the editor cannot be started or exits with an error.
    """
    fd, tmp_name = tempfile.mkstemp(prefix="aic_commit_message_", suffix=".txt")
    message_file = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(message)
            f.write("\n")

        open_editor(message_file, editor)
        edited = message_file.read_text(encoding="utf-8")
    finally:
        message_file.unlink(missing_ok=True)

    logger.debug("Edited message is %d characters", len(edited))
    return edited.strip()


def handle_commit_options(message: str, editor: Optional[str] = None, push: bool = False) -> None:
    """Ask whether to execute, modify or cancel the commit, then do it.

    Args:
        message: The generated commit message.
        editor: Editor command from configuration, if any.
        push: Run git push after a successful commit.
    """
    typer.echo("")
    answer = typer.prompt(COMMIT_PROMPT, default="", show_default=False)
    action = parse_commit_choice(answer)

    if action == CommitAction.EXECUTE:
        execute_commit(message, push=push)
    elif action == CommitAction.MODIFY:
        typer.echo("Opening editor to modify commit message...", err=True)
        edited = edit_commit_message(message, editor)
        if not edited:
            typer.echo("Aborting commit due to empty commit message.", err=True)
            return
        typer.echo("Executing git commit with modified message...", err=True)
        execute_commit(edited, push=push)
    elif action == CommitAction.CANCEL:
        typer.echo("Command not executed.", err=True)
        typer.echo("You can copy and modify the command above.", err=True)
    else:
        typer.echo("Invalid option. Command not executed.", err=True)
        typer.echo("You can copy and modify the command above.", err=True)

"""Shared utility functions for CLI commands."""

import logging
import os
import shlex
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Optional

import typer

# Width that configuration values are truncated to in listings
DISPLAY_WIDTH = 36


def configure_logging(verbose: bool) -> None:
    """Configure the aic logger to write to stderr.

    Args:
        verbose: Show debug messages when True, only warnings otherwise.
    """
    logger = logging.getLogger("aic")
    logger.handlers = [h for h in logger.handlers if not isinstance(h, logging.StreamHandler)]

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False

    # Keep HTTP client chatter out of verbose output
    for name in ("openai", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def mask_token(token: Optional[str]) -> str:
    """Mask an API token for display.

    Args:
        token: The token, or None.

    Returns:
        The first four characters followed by dots for tokens longer than
        eight characters, dots only for shorter ones, '<not set>' for None.
    """
    if not token:
        return "<not set>"
    if len(token) > 8:
        return f"{token[:4]}•••••"
    return "•••••••"


def truncate_for_display(value: Optional[str], width: int = DISPLAY_WIDTH) -> str:
    """Collapse a value to a single line no longer than width characters."""
    if value is None:
        return "<not set>"
    single_line = " ".join(value.split())
    if len(single_line) > width:
        return single_line[: width - 3] + "..."
    return single_line


def find_editor(preferred: Optional[str] = None) -> list[str]:
    """Find an available text editor.

    Preference order:
    1. The editor configured in aic settings
    2. $VISUAL, then $EDITOR environment variables
    3. vim, vi, nano (first one found on PATH)

    Returns:
        List of command parts to run the editor.

    Raises:
        ValueError: If the editor command has unbalanced quotes.
    """
    for editor in (preferred, os.environ.get("VISUAL"), os.environ.get("EDITOR")):
        if editor and editor.strip():
            return shlex.split(editor)

    for candidate in ("vim", "vi", "nano"):
        if shutil.which(candidate):
            return [candidate]

    # Last resort: vi
    return ["vi"]


def open_editor(file_path: Path, preferred: Optional[str] = None) -> None:
    """Open the file in an editor and wait for it to close.

    Args:
        file_path: Path to the file to edit.
        preferred: Editor command from configuration, if any.

    Raises:
        typer.Exit: If the editor cannot be started or exits with an error.
    """
    try:
        editor_cmd = find_editor(preferred)
    except ValueError as e:
        typer.echo(f"Error: Invalid editor command: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Opening editor: {' '.join(editor_cmd)}", err=True)

    try:
        result = subprocess.run(
            editor_cmd + [str(file_path)],
            check=False,
        )
    except FileNotFoundError:
        typer.echo(f"Error: Editor not found: {editor_cmd[0]}", err=True)
        raise typer.Exit(1)
    except OSError as e:
        typer.echo(f"Error: Could not start editor {editor_cmd[0]}: {e}", err=True)
        raise typer.Exit(1)

    if result.returncode != 0:
        typer.echo(f"Error: Editor exited with code {result.returncode}", err=True)
        raise typer.Exit(1)

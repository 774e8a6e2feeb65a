"""Thin wrapper around the git executable.

Contains:
- _run_git_command: Run git with arguments and capture stdout
- get_repo_root: Locate the top-level directory of the enclosing repository
"""

import logging
import subprocess
from pathlib import Path

from aic.git.exceptions import GitCommandError, GitError

logger = logging.getLogger(__name__)


def _run_git_command(args: list[str], strip: bool = True) -> str:
    """Run git with the given arguments.

    Args:
        args: Arguments after the git executable, e.g. ["diff", "--staged"].
        strip: Whether to strip surrounding whitespace from the output.

    Returns:
        Captured standard output.

    Raises:
        GitCommandError: If the command exits with a non-zero status.
        GitError: If git is not installed.
    """
    logger.debug("Running: git %s", " ".join(args[:2]))
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        output = (e.stderr or "").strip() or (e.stdout or "").strip()
        raise GitCommandError(
            f"Git command failed: git {args[0]} (exit code {e.returncode})\n{output}",
            returncode=e.returncode,
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not on PATH.")

    return result.stdout.strip() if strip else result.stdout


def get_repo_root() -> Path:
    """Locate the top-level directory of the enclosing repository.

    Returns:
        Absolute path of the work tree root.

    Raises:
        GitError: If the working directory is outside any repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"])
        return Path(root)
    except GitCommandError:
        raise GitError("Not in a git repository. Run aic from inside a repository work tree.")

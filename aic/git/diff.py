"""Git diff utilities.

Contains:
- stage_all_changes: Stage every change in the working tree
- get_staged_diff: Get the staged diff, truncated if necessary
"""

import logging

from aic.git.exceptions import NoStagedChangesError
from aic.git.runner import _run_git_command, get_repo_root

logger = logging.getLogger(__name__)

DEFAULT_MAX_DIFF_CHARS = 50000

TRUNCATION_MARKER = "\n...[truncated]\n"


def stage_all_changes() -> None:
    """Stage all changes in the working tree (git add .).

    Raises:
        GitError: If not in a git repository or staging fails.
    """
    get_repo_root()
    _run_git_command(["add", "."])


def get_staged_diff(max_chars: int = DEFAULT_MAX_DIFF_CHARS) -> str:
    """Get the staged diff, truncating if necessary.

    Args:
        max_chars: Maximum characters for the diff output.

    Returns:
        The staged diff string.

    Raises:
        GitError: If not in a git repository.
        NoStagedChangesError: If there are no staged changes.
    """
    get_repo_root()

    diff = _run_git_command(["diff", "--staged"], strip=False)

    if not diff.strip():
        raise NoStagedChangesError(
            "No staged changes found. Stage your changes first with: git add <files>"
        )

    if len(diff) > max_chars:
        logger.debug("Truncating staged diff from %d to %d characters", len(diff), max_chars)
        diff = diff[:max_chars] + TRUNCATION_MARKER

    return diff

"""Commit and push utilities.

Contains:
- commit_with_message: Create a commit with the given message
- push_changes: Push committed changes to the remote repository
"""

from aic.git.runner import _run_git_command


def commit_with_message(message: str) -> str:
    """Create a commit from the staged changes.

    The message is passed as a single argument, so no shell quoting applies.

    Args:
        message: The full commit message.

    Returns:
        The output of git commit.

    Raises:
        GitCommandError: If git commit fails.
    """
    return _run_git_command(["commit", "-m", message])


def push_changes() -> str:
    """Push committed changes to the remote repository.

    Returns:
        The output of git push.

    Raises:
        GitCommandError: If git push fails.
    """
    return _run_git_command(["push"])

"""Git integration for aic.

This package wraps the git binary:
- exceptions: GitError, NoStagedChangesError, GitCommandError
- runner: _run_git_command, get_repo_root
- diff: stage_all_changes, get_staged_diff
- commit: commit_with_message, push_changes
"""

from aic.git.exceptions import (
    GitCommandError,
    GitError,
    NoStagedChangesError,
)
from aic.git.runner import (
    _run_git_command,
    get_repo_root,
)
from aic.git.diff import (
    DEFAULT_MAX_DIFF_CHARS,
    get_staged_diff,
    stage_all_changes,
)
from aic.git.commit import (
    commit_with_message,
    push_changes,
)


__all__ = [
    # Exceptions
    "GitError",
    "NoStagedChangesError",
    "GitCommandError",
    # Runner
    "_run_git_command",
    "get_repo_root",
    # Diff
    "DEFAULT_MAX_DIFF_CHARS",
    "get_staged_diff",
    "stage_all_changes",
    # Commit
    "commit_with_message",
    "push_changes",
]

"""Git collaborator for statusline.

This package provides:
- exceptions: GitError, GitUnavailableError
- runner: _run_git_command
- status: get_git_status, normalize_remote_url, count_numstat_lines
"""

# Exceptions
from statusline.git.exceptions import (
    GitError,
    GitUnavailableError,
)

# Runner utilities
from statusline.git.runner import _run_git_command

# Status collection
from statusline.git.status import (
    count_numstat_lines,
    get_git_status,
    normalize_remote_url,
)


__all__ = [
    # Exceptions
    "GitError",
    "GitUnavailableError",
    # Runner
    "_run_git_command",
    # Status
    "count_numstat_lines",
    "get_git_status",
    "normalize_remote_url",
]

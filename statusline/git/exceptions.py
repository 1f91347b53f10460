"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- GitUnavailableError: Raised when git is missing or doesn't answer in time
"""

from statusline.exceptions import CollaboratorError


class GitError(CollaboratorError):
    """Custom exception for git-related errors."""

    pass


class GitUnavailableError(GitError):
    """Raised when git is not installed or the command times out."""

    pass

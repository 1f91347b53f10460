"""Git status collection.

Contains:
- count_numstat_lines: Count changed files in `git diff --numstat` output
- normalize_remote_url: Turn a remote URL into a browsable https URL
- get_git_status: Collect branch, change counts and remote for a directory
"""

import re

from statusline.cache.models import GitStatusFact
from statusline.git.exceptions import GitError, GitUnavailableError
from statusline.git.runner import DEFAULT_TIMEOUT, _run_git_command

_SCP_REMOTE = re.compile(r"^(?:[\w.-]+@)?([^:/]+):(?!//)(.+)$")
_SSH_REMOTE = re.compile(r"^ssh://(?:[\w.-]+@)?([^/:]+)(?::\d+)?/(.+)$")


def count_numstat_lines(output: str) -> int:
    """Count file entries in `git diff --numstat` output."""
    return len([line for line in output.split("\n") if line.strip()])


def normalize_remote_url(remote: str) -> str:
    """Convert a git remote into an https URL suitable for a hyperlink.

    git@github.com:owner/repo.git -> https://github.com/owner/repo

    Args:
        remote: Output of `git remote get-url origin`.

    Returns:
        The https URL, or an empty string if the remote isn't web-addressable.
    """
    remote = remote.strip()
    if not remote:
        return ""

    match = _SSH_REMOTE.match(remote) or _SCP_REMOTE.match(remote)
    if match:
        url = f"https://{match.group(1)}/{match.group(2)}"
    elif remote.startswith(("https://", "http://")):
        url = remote
    else:
        # Local paths and file:// remotes have nothing to link to
        return ""

    if url.endswith(".git"):
        url = url[: -len(".git")]
    return url


def get_git_status(project_dir: str, timeout: float = DEFAULT_TIMEOUT) -> GitStatusFact:
    """Collect version-control status for a project directory.

    A directory outside any repository is a valid answer (has_repo=False),
    not an error.

    Args:
        project_dir: Directory to inspect.
        timeout: Seconds allowed per git command.

    Returns:
        GitStatusFact for the directory.

    Raises:
        GitUnavailableError: If git is missing or a command times out.
    """
    if not project_dir:
        return GitStatusFact()

    try:
        _run_git_command(["rev-parse", "--git-dir"], project_dir, timeout)
    except GitUnavailableError:
        raise
    except GitError:
        return GitStatusFact(has_repo=False)

    branch = _run_git_command(["branch", "--show-current"], project_dir, timeout)
    staged = _run_git_command(["diff", "--cached", "--numstat"], project_dir, timeout)
    modified = _run_git_command(["diff", "--numstat"], project_dir, timeout)

    try:
        remote = _run_git_command(["remote", "get-url", "origin"], project_dir, timeout)
    except GitUnavailableError:
        raise
    except GitError:
        # No origin configured
        remote = ""

    return GitStatusFact(
        has_repo=True,
        branch=branch,
        staged_count=count_numstat_lines(staged),
        modified_count=count_numstat_lines(modified),
        remote_url=normalize_remote_url(remote),
    )

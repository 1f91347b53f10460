"""Git command runner.

Contains:
- _run_git_command: Run a git command against a directory and return its output
"""

import subprocess

from statusline.git.exceptions import GitError, GitUnavailableError

DEFAULT_TIMEOUT = 3.0


def _run_git_command(args: list[str], cwd: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory the command is scoped to (passed as git -C).
        timeout: Seconds before the command is abandoned.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
        GitUnavailableError: If git is missing or times out.
    """
    try:
        result = subprocess.run(
            ["git", "-C", cwd] + args,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            check=True,
            timeout=timeout,
        )
        return result.stdout.strip()
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{(e.stderr or '').strip()}")
    except subprocess.TimeoutExpired:
        raise GitUnavailableError(f"Git command timed out after {timeout}s: git {' '.join(args)}")
    except FileNotFoundError:
        raise GitUnavailableError("Git is not installed or not in PATH.")
    except OSError as e:
        raise GitUnavailableError(f"Could not run git: {e}")

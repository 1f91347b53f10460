"""Host update check.

Compares the installed host CLI version with the latest version published
to the npm registry.
"""

import subprocess

from statusline.cache.models import UpdateFact
from statusline.remote.exceptions import FetchError, MalformedResponseError
from statusline.remote.http import get_json

REGISTRY_URL = "https://registry.npmjs.org/@anthropic-ai/claude-code/latest"
HOST_BINARY = "claude"
DEFAULT_TIMEOUT = 3.0


def get_local_version(timeout: float = DEFAULT_TIMEOUT) -> str:
    """Return the installed host version.

    `claude --version` prints e.g. "2.0.14 (Claude Code)"; only the first
    token is kept.

    Raises:
        FetchError: If the binary is missing, fails or times out.
    """
    try:
        result = subprocess.run(
            [HOST_BINARY, "--version"],
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            check=True,
            timeout=timeout,
        )
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
        raise FetchError(f"Could not query local version: {e}")

    parts = result.stdout.split()
    if not parts:
        raise FetchError("Version query printed nothing")
    return parts[0]


def get_remote_version(timeout: float = DEFAULT_TIMEOUT) -> str:
    """Return the latest published version from the registry."""
    data = get_json(REGISTRY_URL, timeout=timeout)
    version = data.get("version")
    if not isinstance(version, str) or not version.strip():
        raise MalformedResponseError("Registry response has no version")
    return version.strip()


def check_for_update(timeout: float = DEFAULT_TIMEOUT) -> UpdateFact:
    """Collect local and remote versions.

    Raises:
        FetchError: If either version can't be determined.
    """
    local_version = get_local_version(timeout)
    remote_version = get_remote_version(timeout)
    return UpdateFact(local_version=local_version, remote_version=remote_version)

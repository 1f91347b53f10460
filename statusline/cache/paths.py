"""Cache location and record keys for statusline.

Contains:
- get_cache_dir: Directory holding the cache records
- KEY_PREFIX: Prefix shared by every record key
- session_tag: Truncated session id used to scope update records
- git_key / usage_key / update_key / session_key: Record keys per kind
"""

import tempfile
from pathlib import Path
from typing import Optional

KEY_PREFIX = "claude-sl-"
SESSION_TAG_LENGTH = 12
NO_SESSION_TAG = "nosid"


def get_cache_dir(configured: Optional[Path] = None) -> Path:
    """Return the cache directory.

    Args:
        configured: Directory from configuration or the CLI, if any.

    Returns:
        The configured directory, else the system temp dir (honours TMPDIR).
    """
    if configured is not None:
        return configured
    return Path(tempfile.gettempdir())


def session_tag(session_id: Optional[str]) -> str:
    """Return the first 12 characters of the session id, or a sentinel."""
    tag = (session_id or "")[:SESSION_TAG_LENGTH]
    return tag or NO_SESSION_TAG


def git_key() -> str:
    return f"{KEY_PREFIX}git"


def usage_key() -> str:
    return f"{KEY_PREFIX}usage"


def update_key(tag: str) -> str:
    """Update records are per session so sessions don't share a stale check."""
    return f"{KEY_PREFIX}update-{tag}"


def session_key() -> str:
    return f"{KEY_PREFIX}session"

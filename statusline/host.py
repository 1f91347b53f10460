"""Host settings and credentials.

Reads two optional files written by the host CLI:
- settings.json: the autoCompact flag (default true)
- .credentials.json: the OAuth access token for the usage API

Absence or unreadable content means "default" / "no credential".
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

log = logging.getLogger(__name__)


def _load_json_object(path: Path) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        # ValueError covers both bad JSON and bad UTF-8
        log.debug(f"Ignoring unreadable {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def load_auto_compact_enabled(settings_path: Path) -> bool:
    """Return whether auto-compaction is enabled in host settings.

    Only an explicit `"autoCompact": false` disables it.
    """
    return _load_json_object(settings_path).get("autoCompact", True) is not False


def load_oauth_token(credentials_path: Path) -> Optional[str]:
    """Return the OAuth access token from the host credentials file.

    Looks for claudeAiOauth.accessToken, then a top-level accessToken.
    """
    creds = _load_json_object(credentials_path)
    oauth = creds.get("claudeAiOauth")
    token = oauth.get("accessToken") if isinstance(oauth, dict) else None
    token = token or creds.get("accessToken")
    return token if isinstance(token, str) and token else None

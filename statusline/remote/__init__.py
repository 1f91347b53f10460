"""Remote collaborators for statusline.

This package provides:
- exceptions: FetchError, MissingCredentialError, MalformedResponseError
- http: get_json
- usage_api: fetch_usage, parse_usage
- update_check: check_for_update, get_local_version, get_remote_version
"""

from statusline.remote.exceptions import (
    FetchError,
    MalformedResponseError,
    MissingCredentialError,
)
from statusline.remote.http import get_json
from statusline.remote.update_check import (
    check_for_update,
    get_local_version,
    get_remote_version,
)
from statusline.remote.usage_api import fetch_usage, parse_usage


__all__ = [
    "FetchError",
    "MalformedResponseError",
    "MissingCredentialError",
    "get_json",
    "check_for_update",
    "get_local_version",
    "get_remote_version",
    "fetch_usage",
    "parse_usage",
]

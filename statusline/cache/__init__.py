"""Cache module for statusline.

This package keeps externally sourced facts between renders:
- models: CacheRecord and the cached fact models
- paths: Cache directory and record keys
- stores: RecordStore protocol with file and memory backends
- manager: CacheManager (fetch, freshness, session-seen tracking)
"""

# Models
from statusline.cache.models import (
    CacheRecord,
    GitStatusFact,
    SessionMarker,
    UpdateFact,
    UsageFact,
)

# Path utilities
from statusline.cache.paths import (
    KEY_PREFIX,
    get_cache_dir,
    git_key,
    session_key,
    session_tag,
    update_key,
    usage_key,
)

# Stores
from statusline.cache.stores import (
    FileRecordStore,
    MemoryRecordStore,
    RecordStore,
)

# Manager
from statusline.cache.manager import (
    CacheKind,
    CacheManager,
    KindPolicy,
    default_policies,
    identity_matches,
)


__all__ = [
    # Models
    "CacheRecord",
    "GitStatusFact",
    "SessionMarker",
    "UpdateFact",
    "UsageFact",
    # Path utilities
    "KEY_PREFIX",
    "get_cache_dir",
    "git_key",
    "session_key",
    "session_tag",
    "update_key",
    "usage_key",
    # Stores
    "FileRecordStore",
    "MemoryRecordStore",
    "RecordStore",
    # Manager
    "CacheKind",
    "CacheManager",
    "KindPolicy",
    "default_policies",
    "identity_matches",
]

"""Wiring between the cache manager and its external collaborators.

Each loader takes the caller's identity and either returns a fact or raises
a CollaboratorError.
"""

from pathlib import Path
from typing import Optional

from statusline.cache import CacheKind, CacheManager, FileRecordStore, get_cache_dir
from statusline.cache.manager import Loader
from statusline.cache.models import GitStatusFact, UpdateFact, UsageFact
from statusline.config import StatuslineConfig
from statusline.git import get_git_status
from statusline.host import load_oauth_token
from statusline.remote import check_for_update, fetch_usage


def git_loader(timeout: float) -> Loader:
    def load(project_dir: Optional[str]) -> GitStatusFact:
        return get_git_status(project_dir or "", timeout=timeout)

    return load


def usage_loader(credentials_path: Path, timeout: float) -> Loader:
    def load(identity: Optional[str]) -> UsageFact:
        # Read lazily: the credentials file is only touched on a cache miss
        return fetch_usage(load_oauth_token(credentials_path), timeout=timeout)

    return load


def update_loader(timeout: float) -> Loader:
    def load(identity: Optional[str]) -> UpdateFact:
        return check_for_update(timeout=timeout)

    return load


def default_loaders(config: StatuslineConfig) -> dict[CacheKind, Loader]:
    """Build the loader table from configuration."""
    return {
        CacheKind.GIT_STATUS: git_loader(config.timeouts.git),
        CacheKind.USAGE: usage_loader(config.credentials_path, config.timeouts.usage),
        CacheKind.UPDATE: update_loader(config.timeouts.update),
    }


def build_cache_manager(config: StatuslineConfig, cache_dir: Optional[Path] = None) -> CacheManager:
    """Create a file-backed cache manager wired to the real collaborators.

    Args:
        config: Effective configuration.
        cache_dir: Directory override (CLI flag); falls back to config, then TMPDIR.
    """
    store = FileRecordStore(get_cache_dir(cache_dir or config.cache_dir))
    return CacheManager(store, default_loaders(config), ttl=config.ttl)

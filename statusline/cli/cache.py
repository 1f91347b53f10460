"""CLI commands for inspecting cache records."""

import time
from pathlib import Path
from typing import Optional

import typer

from statusline.cache import (
    KEY_PREFIX,
    CacheKind,
    CacheManager,
    FileRecordStore,
    get_cache_dir,
    git_key,
    usage_key,
)
from statusline.config import ConfigError, default_config, load_config

# Subcommand group for cache inspection
cache_app = typer.Typer(
    name="cache",
    help="Inspect cached git, usage and update records",
    add_completion=False,
)


def _kind_for_key(key: str) -> Optional[CacheKind]:
    if key == git_key():
        return CacheKind.GIT_STATUS
    if key == usage_key():
        return CacheKind.USAGE
    if key.startswith(f"{KEY_PREFIX}update-"):
        return CacheKind.UPDATE
    return None


@cache_app.command("show")
def cache_show(ctx: typer.Context) -> None:
    """List cache records with their age and freshness."""
    options = ctx.obj or {}
    try:
        config = load_config(options.get("config_path"))
    except ConfigError:
        config = default_config()

    cache_dir: Path = get_cache_dir(options.get("cache_dir") or config.cache_dir)
    store = FileRecordStore(cache_dir)
    manager = CacheManager(store, loaders={}, ttl=config.ttl)
    now = time.time()

    keys = [key for key in store.keys() if key.startswith(KEY_PREFIX)]
    typer.echo(f"Cache directory: {cache_dir}")
    if not keys:
        typer.echo("No cache records.")
        return

    for key in keys:
        kind = _kind_for_key(key)
        if kind is None:
            typer.echo(f"  {key}")
            continue

        identity = key[len(f"{KEY_PREFIX}update-"):] if kind is CacheKind.UPDATE else None
        record = manager.read_record(kind, identity)
        if record is None:
            typer.echo(f"  {key}: unreadable")
            continue

        age = now - record.captured_at
        state = "fresh" if manager.is_fresh(kind, record, now=now) else "stale"
        line = f"  {key}: {state}, age {age:.0f}s / ttl {manager.policy(kind).ttl:.0f}s"
        if record.identity:
            line += f", identity {record.identity}"
        typer.echo(line)

"""Record stores.

A record store maps a key to a serialized record. Two backends satisfy the
same contract:
- FileRecordStore: One JSON file per key, replaced atomically
- MemoryRecordStore: Dict-backed, nothing touches disk (tests)
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

log = logging.getLogger(__name__)


class RecordStore(Protocol):
    """Key-value storage for cache records."""

    def read(self, key: str) -> Optional[str]:
        """Return the stored text, or None if there is none."""
        ...

    def write(self, key: str, data: str) -> None:
        """Replace the stored text. Raises OSError on failure."""
        ...

    def keys(self) -> list[str]:
        """Return every stored key, sorted."""
        ...


class FileRecordStore:
    """Stores records as JSON files in a directory."""

    def __init__(self, base_path: Path) -> None:
        self._base = base_path

    @property
    def base_path(self) -> Path:
        return self._base

    def key_path(self, key: str) -> Path:
        safe_key = key.replace("/", "_").replace("\\", "_")
        return self._base / f"{safe_key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self.key_path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            log.debug(f"Could not read {path}: {e}")
            return None

    def write(self, key: str, data: str) -> None:
        path = self.key_path(key)
        self._base.mkdir(parents=True, exist_ok=True)

        # Write beside the target and rename so readers never see a torn file
        fd, tmp_path = tempfile.mkstemp(dir=self._base, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.replace(tmp_path, path)
        except OSError:
            Path(tmp_path).unlink(missing_ok=True)
            raise
        log.debug(f"Saved {key} to {path}")

    def keys(self) -> list[str]:
        if not self._base.is_dir():
            return []
        return sorted(path.stem for path in self._base.glob("*.json"))


class MemoryRecordStore:
    """Stores records in a plain dict."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}
        self.writes: list[str] = []

    def read(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def write(self, key: str, data: str) -> None:
        self._store[key] = data
        self.writes.append(key)

    def keys(self) -> list[str]:
        return sorted(self._store)

"""External state cache manager.

Every render is a fresh process, so facts that are slow to obtain are kept
in small records between renders. A record is usable while it is younger
than its kind's TTL and was captured for the caller's identity. Otherwise
the kind's loader runs once; on success its result replaces the record
wholesale, on failure the previous payload (or the kind's default) is
returned and the record is left alone so the next render retries.

Contains:
- CacheKind: The cached fact kinds
- KindPolicy: TTL, model, key and default for one kind
- CacheManager: fetch / freshness / session-seen operations
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping, Optional

from pydantic import BaseModel, ValidationError

from statusline.cache.models import (
    CacheRecord,
    GitStatusFact,
    SessionMarker,
    UpdateFact,
    UsageFact,
)
from statusline.cache.paths import git_key, session_key, session_tag, update_key, usage_key
from statusline.cache.stores import RecordStore
from statusline.config import CacheTTL
from statusline.exceptions import CollaboratorError

log = logging.getLogger(__name__)

Loader = Callable[[Optional[str]], BaseModel]


class CacheKind(Enum):
    """Kinds of externally sourced facts."""

    GIT_STATUS = "git"
    USAGE = "usage"
    UPDATE = "update"


@dataclass(frozen=True)
class KindPolicy:
    """How one kind is keyed, validated and expired."""

    ttl: float
    model: type[BaseModel]
    key: Callable[[Optional[str]], str]
    default: Callable[[], Optional[BaseModel]]


def default_policies(ttl: CacheTTL) -> dict[CacheKind, KindPolicy]:
    """Build the policy table from configured TTLs."""
    return {
        CacheKind.GIT_STATUS: KindPolicy(
            ttl=ttl.git,
            model=GitStatusFact,
            key=lambda identity: git_key(),
            default=GitStatusFact,
        ),
        CacheKind.USAGE: KindPolicy(
            ttl=ttl.usage,
            model=UsageFact,
            key=lambda identity: usage_key(),
            # No usage data means no quota bars at all, not zeroed bars
            default=lambda: None,
        ),
        CacheKind.UPDATE: KindPolicy(
            ttl=ttl.update,
            model=UpdateFact,
            key=lambda identity: update_key(identity or session_tag(None)),
            default=UpdateFact,
        ),
    }


def identity_matches(record: CacheRecord, identity: Optional[str]) -> bool:
    """A caller without an identity matches any record."""
    return identity is None or record.identity == identity


class CacheManager:
    """TTL- and identity-keyed cache over external collaborators."""

    def __init__(
        self,
        store: RecordStore,
        loaders: Mapping[CacheKind, Loader],
        ttl: CacheTTL = CacheTTL(),
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the manager.

        Args:
            store: Backend holding the records.
            loaders: Collaborator per kind, called with the caller's identity
                on a miss. Loaders signal failure with CollaboratorError.
            ttl: Lifetimes per kind.
            clock: Source of the current time in epoch seconds.
        """
        self._store = store
        self._loaders = dict(loaders)
        self._policies = default_policies(ttl)
        self._clock = clock

    def policy(self, kind: CacheKind) -> KindPolicy:
        """Return the TTL, model, key and default for a kind."""
        return self._policies[kind]

    def read_record(self, kind: CacheKind, identity: Optional[str] = None) -> Optional[CacheRecord]:
        """Load the persisted record for a kind, or None if absent or unreadable."""
        key = self._policies[kind].key(identity)
        text = self._store.read(key)
        if text is None:
            return None
        try:
            return CacheRecord.model_validate_json(text)
        except ValidationError:
            log.debug(f"Discarding malformed record {key}")
            return None

    def is_fresh(
        self,
        kind: CacheKind,
        record: CacheRecord,
        identity: Optional[str] = None,
        now: Optional[float] = None,
    ) -> bool:
        """Check whether a record can be used without refreshing.

        The TTL boundary is exclusive: a record exactly ttl seconds old is stale.
        A record captured in the future (clock set back) is stale too.
        """
        now = self._clock() if now is None else now
        age = now - record.captured_at
        return 0 <= age < self._policies[kind].ttl and identity_matches(record, identity)

    def _payload(self, kind: CacheKind, record: CacheRecord) -> Optional[BaseModel]:
        try:
            return self._policies[kind].model.model_validate(record.payload)
        except ValidationError:
            log.debug(f"Discarding malformed {kind.value} payload")
            return None

    def fetch(self, kind: CacheKind, identity: Optional[str] = None) -> Optional[BaseModel]:
        """Return the fact for a kind, refreshing it through its loader if needed.

        Never raises for collaborator failures, malformed records or failed
        writes.

        Args:
            kind: Which fact to fetch.
            identity: What the fact must belong to (project dir, session tag).

        Returns:
            The fresh or newly loaded fact; on failure the previous fact for
            the same identity, else the kind's default.
        """
        policy = self._policies[kind]
        now = self._clock()

        previous = None
        record = self.read_record(kind, identity)
        if record is not None:
            payload = self._payload(kind, record)
            if payload is not None and self.is_fresh(kind, record, identity, now):
                log.debug(f"Cache hit for {kind.value}")
                return payload
            # A stale fact may stand in for a failed refresh, but only for
            # the same identity: another directory's branch must never leak
            if identity_matches(record, identity):
                previous = payload

        loader = self._loaders.get(kind)
        if loader is None:
            return previous if previous is not None else policy.default()

        try:
            value = loader(identity)
        except CollaboratorError as e:
            log.debug(f"Refreshing {kind.value} failed: {e}")
            return previous if previous is not None else policy.default()

        fresh = CacheRecord(
            identity=identity,
            captured_at=now,
            payload=value.model_dump(mode="json"),
        )
        try:
            self._store.write(policy.key(identity), fresh.model_dump_json())
        except OSError as e:
            log.debug(f"Could not persist {kind.value} record: {e}")
        return value

    def is_first_render_of_session(self, session_id: str) -> bool:
        """Report whether this is the first render of a session.

        The marker is rewritten only when a new session id is seen, so the
        answer is True exactly once per distinct id. An empty id never counts.
        """
        if not session_id:
            return False

        stored = None
        text = self._store.read(session_key())
        if text is not None:
            try:
                stored = SessionMarker.model_validate_json(text).last_session_id
            except ValidationError:
                log.debug("Discarding malformed session marker")

        if stored == session_id:
            return False

        marker = SessionMarker(last_session_id=session_id)
        try:
            self._store.write(session_key(), marker.model_dump_json())
        except OSError as e:
            log.debug(f"Could not persist session marker: {e}")
        return True

    def git_status(self, project_dir: str) -> GitStatusFact:
        """Return version-control status for a project directory."""
        return self.fetch(CacheKind.GIT_STATUS, project_dir)

    def usage(self) -> Optional[UsageFact]:
        """Return quota usage, or None if no fetch has ever succeeded."""
        return self.fetch(CacheKind.USAGE)

    def update_info(self, session_id: Optional[str]) -> UpdateFact:
        """Return the update check scoped to a session."""
        return self.fetch(CacheKind.UPDATE, session_tag(session_id))

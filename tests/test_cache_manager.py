"""Tests for statusline.cache.manager module."""

import json
from decimal import Decimal

from statusline.cache import (
    CacheKind,
    CacheManager,
    CacheRecord,
    GitStatusFact,
    UpdateFact,
    UsageFact,
    git_key,
    session_key,
    update_key,
    usage_key,
)
from statusline.collaborators import usage_loader
from statusline.config import CacheTTL
from statusline.git import GitError
from statusline.remote import FetchError, parse_usage


class RecordingLoader:
    """Loader stub that records calls and returns or raises."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def __call__(self, identity):
        self.calls.append(identity)
        if self.error is not None:
            raise self.error
        return self.result


def make_manager(store, clock, **loaders):
    table = {}
    if "git" in loaders:
        table[CacheKind.GIT_STATUS] = loaders["git"]
    if "usage" in loaders:
        table[CacheKind.USAGE] = loaders["usage"]
    if "update" in loaders:
        table[CacheKind.UPDATE] = loaders["update"]
    return CacheManager(store, table, ttl=CacheTTL(), clock=clock)


def seed(store, key, payload, captured_at, identity=None):
    record = CacheRecord(identity=identity, captured_at=captured_at, payload=payload)
    store.write(key, record.model_dump_json())


class TestFetchMiss:
    """Tests for fetch when no usable record exists."""

    def test_calls_loader_and_persists(self, memory_store, clock):
        """Test a miss loads, stores and returns the fact."""
        fact = GitStatusFact(has_repo=True, branch="main")
        loader = RecordingLoader(result=fact)
        manager = make_manager(memory_store, clock, git=loader)

        result = manager.fetch(CacheKind.GIT_STATUS, "/repo")

        assert result == fact
        assert loader.calls == ["/repo"]
        record = CacheRecord.model_validate_json(memory_store.read(git_key()))
        assert record.identity == "/repo"
        assert record.captured_at == clock.now
        assert record.payload["branch"] == "main"

    def test_second_fetch_is_a_hit(self, memory_store, clock):
        loader = RecordingLoader(result=GitStatusFact(has_repo=True, branch="main"))
        manager = make_manager(memory_store, clock, git=loader)

        manager.fetch(CacheKind.GIT_STATUS, "/repo")
        clock.advance(5)
        manager.fetch(CacheKind.GIT_STATUS, "/repo")

        assert loader.calls == ["/repo"]

    def test_malformed_record_is_a_miss(self, memory_store, clock):
        """Test an unparsable record is treated as absent."""
        memory_store.write(usage_key(), "{not json")
        loader = RecordingLoader(result=UsageFact(five_hour_pct=5))
        manager = make_manager(memory_store, clock, usage=loader)

        assert manager.usage().five_hour_pct == 5
        assert loader.calls == [None]

    def test_malformed_payload_is_a_miss(self, memory_store, clock):
        seed(memory_store, usage_key(), {"five_hour_pct": "lots"}, clock.now)
        loader = RecordingLoader(result=UsageFact(five_hour_pct=7))
        manager = make_manager(memory_store, clock, usage=loader)

        assert manager.usage().five_hour_pct == 7

    def test_missing_loader_returns_default(self, memory_store, clock):
        manager = make_manager(memory_store, clock)
        assert manager.git_status("/repo") == GitStatusFact()
        assert manager.usage() is None


class TestFreshness:
    """Tests for TTL and identity freshness rules."""

    def test_age_just_below_ttl_is_fresh(self, memory_store, clock):
        """Test age = ttl - 1 is served from cache."""
        seed(memory_store, usage_key(), {"five_hour_pct": 33}, clock.now - 59)
        loader = RecordingLoader(result=UsageFact(five_hour_pct=99))
        manager = make_manager(memory_store, clock, usage=loader)

        assert manager.usage().five_hour_pct == 33
        assert loader.calls == []

    def test_age_equal_to_ttl_is_stale(self, memory_store, clock):
        """Test the TTL boundary is exclusive."""
        seed(memory_store, usage_key(), {"five_hour_pct": 33}, clock.now - 60)
        loader = RecordingLoader(result=UsageFact(five_hour_pct=99))
        manager = make_manager(memory_store, clock, usage=loader)

        assert manager.usage().five_hour_pct == 99
        assert loader.calls == [None]

    def test_is_fresh_boundary(self, memory_store, clock):
        manager = make_manager(memory_store, clock)
        fresh = CacheRecord(identity="/repo", captured_at=clock.now - 29, payload={})
        stale = CacheRecord(identity="/repo", captured_at=clock.now - 30, payload={})

        assert manager.is_fresh(CacheKind.GIT_STATUS, fresh, "/repo") is True
        assert manager.is_fresh(CacheKind.GIT_STATUS, stale, "/repo") is False

    def test_git_hit_within_ttl_skips_query(self, memory_store, clock):
        """Test a 25s old record for the same directory is used as-is."""
        seed(
            memory_store,
            git_key(),
            {"has_repo": True, "branch": "feature"},
            clock.now - 25,
            identity="/repo",
        )
        loader = RecordingLoader(result=GitStatusFact(has_repo=True, branch="other"))
        manager = make_manager(memory_store, clock, git=loader)

        assert manager.git_status("/repo").branch == "feature"
        assert loader.calls == []

    def test_identity_change_invalidates(self, memory_store, clock):
        """Test another directory forces a refresh even within the TTL."""
        seed(
            memory_store,
            git_key(),
            {"has_repo": True, "branch": "feature"},
            clock.now - 5,
            identity="/repo",
        )
        loader = RecordingLoader(result=GitStatusFact(has_repo=True, branch="main"))
        manager = make_manager(memory_store, clock, git=loader)

        assert manager.git_status("/other").branch == "main"
        assert loader.calls == ["/other"]

    def test_changing_back_does_not_resurrect(self, memory_store, clock):
        """Test returning to the first directory needs a fresh query."""
        loader = RecordingLoader(result=GitStatusFact(has_repo=True, branch="a"))
        manager = make_manager(memory_store, clock, git=loader)

        manager.git_status("/repo")
        clock.advance(2)
        manager.git_status("/other")
        clock.advance(2)
        manager.git_status("/repo")

        assert loader.calls == ["/repo", "/other", "/repo"]

    def test_global_kind_ignores_identity(self, memory_store, clock):
        manager = make_manager(memory_store, clock)
        record = CacheRecord(identity="whatever", captured_at=clock.now, payload={})
        assert manager.is_fresh(CacheKind.USAGE, record) is True

    def test_future_record_is_stale(self, memory_store, clock):
        """Test a record stamped ahead of the clock is refreshed."""
        seed(memory_store, usage_key(), {"five_hour_pct": 33}, clock.now + 3600)
        loader = RecordingLoader(result=UsageFact(five_hour_pct=99))
        manager = make_manager(memory_store, clock, usage=loader)

        assert manager.usage().five_hour_pct == 99
        assert loader.calls == [None]

    def test_is_fresh_rejects_negative_age(self, memory_store, clock):
        manager = make_manager(memory_store, clock)
        record = CacheRecord(captured_at=clock.now + 1, payload={})
        assert manager.is_fresh(CacheKind.USAGE, record) is False


class TestFetchFailure:
    """Tests for collaborator failures."""

    def test_stale_payload_is_returned(self, memory_store, clock):
        """Test a failed refresh falls back to the last known value."""
        seed(memory_store, usage_key(), {"five_hour_pct": 60}, clock.now - 600)
        before = memory_store.read(usage_key())
        loader = RecordingLoader(error=FetchError("timed out"))
        manager = make_manager(memory_store, clock, usage=loader)

        result = manager.usage()

        assert result.five_hour_pct == 60
        assert memory_store.read(usage_key()) == before

    def test_failure_is_retried_next_time(self, memory_store, clock):
        """Test a failure doesn't lock in: the next fetch calls again."""
        seed(memory_store, usage_key(), {"five_hour_pct": 60}, clock.now - 600)
        loader = RecordingLoader(error=FetchError("timed out"))
        manager = make_manager(memory_store, clock, usage=loader)

        manager.usage()
        manager.usage()

        assert loader.calls == [None, None]

    def test_default_without_previous(self, memory_store, clock):
        manager = make_manager(
            memory_store,
            clock,
            git=RecordingLoader(error=GitError("boom")),
            usage=RecordingLoader(error=FetchError("boom")),
            update=RecordingLoader(error=FetchError("boom")),
        )

        assert manager.git_status("/repo") == GitStatusFact()
        assert manager.usage() is None
        assert manager.update_info("sess") == UpdateFact()
        assert memory_store.writes == []

    def test_no_fallback_across_identities(self, memory_store, clock):
        """Test another directory's stale branch is never shown."""
        seed(
            memory_store,
            git_key(),
            {"has_repo": True, "branch": "secret"},
            clock.now - 600,
            identity="/repo",
        )
        manager = make_manager(memory_store, clock, git=RecordingLoader(error=GitError("x")))

        assert manager.git_status("/other") == GitStatusFact()

    def test_overflowing_usage_response_falls_back(self, memory_store, clock):
        """Test an unparsable utilization keeps the last known value."""
        seed(memory_store, usage_key(), {"five_hour_pct": 60}, clock.now - 600)

        def load(identity):
            return parse_usage(json.loads('{"five_hour": {"utilization": 1e999}}'))

        manager = make_manager(memory_store, clock, usage=load)

        assert manager.usage().five_hour_pct == 60

    def test_unreadable_credentials_fall_back(self, memory_store, clock, temp_dir):
        credentials = temp_dir / ".credentials.json"
        credentials.write_bytes(b"\xff\xfe{}")
        seed(memory_store, usage_key(), {"five_hour_pct": 60}, clock.now - 600)
        loader = usage_loader(credentials, timeout=1.0)
        manager = make_manager(memory_store, clock, usage=loader)

        assert manager.usage().five_hour_pct == 60

    def test_write_failure_still_returns_value(self, memory_store, clock, mocker):
        mocker.patch.object(memory_store, "write", side_effect=OSError("read-only"))
        fact = UsageFact(five_hour_pct=12)
        manager = make_manager(memory_store, clock, usage=RecordingLoader(result=fact))

        assert manager.usage() == fact


class TestUpdateKind:
    """Tests for the per-session update record."""

    def test_keyed_by_session_tag(self, memory_store, clock):
        fact = UpdateFact(local_version="1.0.0", remote_version="1.1.0")
        manager = make_manager(memory_store, clock, update=RecordingLoader(result=fact))

        assert manager.update_info("abcdefghijklmnop") == fact
        assert memory_store.writes == [update_key("abcdefghijkl")]

    def test_sessions_do_not_share_records(self, memory_store, clock):
        loader = RecordingLoader(result=UpdateFact(local_version="1", remote_version="1"))
        manager = make_manager(memory_store, clock, update=loader)

        manager.update_info("session-one-xx")
        manager.update_info("session-two-xx")
        manager.update_info("session-one-xx")

        assert loader.calls == ["session-one-", "session-two-"]

    def test_missing_session_uses_sentinel(self, memory_store, clock):
        manager = make_manager(memory_store, clock, update=RecordingLoader(result=UpdateFact()))
        manager.update_info(None)
        assert memory_store.writes == [update_key("nosid")]

    def test_hourly_ttl(self, memory_store, clock):
        loader = RecordingLoader(result=UpdateFact(local_version="1", remote_version="2"))
        manager = make_manager(memory_store, clock, update=loader)

        manager.update_info("s")
        clock.advance(3599)
        manager.update_info("s")
        clock.advance(1)
        manager.update_info("s")

        assert len(loader.calls) == 2


class TestSessionSeen:
    """Tests for is_first_render_of_session."""

    def test_true_once_per_session(self, memory_store, clock):
        manager = make_manager(memory_store, clock)

        assert manager.is_first_render_of_session("abc123") is True
        assert manager.is_first_render_of_session("abc123") is False
        assert manager.is_first_render_of_session("abc123") is False

    def test_new_session_is_first_again(self, memory_store, clock):
        manager = make_manager(memory_store, clock)

        manager.is_first_render_of_session("abc123")
        assert manager.is_first_render_of_session("xyz789") is True

    def test_marker_written_only_on_change(self, memory_store, clock):
        manager = make_manager(memory_store, clock)

        for _ in range(3):
            manager.is_first_render_of_session("abc123")

        assert memory_store.writes.count(session_key()) == 1
        assert json.loads(memory_store.read(session_key())) == {"last_session_id": "abc123"}

    def test_marker_never_expires(self, memory_store, clock):
        manager = make_manager(memory_store, clock)
        manager.is_first_render_of_session("abc123")
        clock.advance(10 * 24 * 3600)
        assert manager.is_first_render_of_session("abc123") is False

    def test_empty_session_id(self, memory_store, clock):
        manager = make_manager(memory_store, clock)
        assert manager.is_first_render_of_session("") is False
        assert memory_store.writes == []

    def test_corrupt_marker_counts_as_absent(self, memory_store, clock):
        memory_store.write(session_key(), "garbage")
        manager = make_manager(memory_store, clock)
        assert manager.is_first_render_of_session("abc123") is True


class TestPayloadSerialization:
    """Tests for fact payloads surviving a store round trip."""

    def test_usage_decimal_and_datetime(self, memory_store, clock):
        fact = UsageFact(
            five_hour_pct=40,
            five_hour_reset_at="2025-06-01T17:00:00Z",
            extra_enabled=True,
            extra_used=Decimal("12.50"),
            extra_limit=Decimal("50.00"),
        )
        writer = make_manager(memory_store, clock, usage=RecordingLoader(result=fact))
        writer.usage()

        reader = make_manager(memory_store, clock)
        cached = reader.usage()

        assert cached == fact
        assert cached.extra_used == Decimal("12.50")

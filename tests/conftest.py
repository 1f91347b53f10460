"""Shared test fixtures and configuration."""

import json
import re
import tempfile
from pathlib import Path

import pytest

from statusline.cache import MemoryRecordStore

ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m|\x1b\]8;;[^\a]*\a")


def strip_ansi(text: str) -> str:
    """Remove colour and hyperlink escape sequences."""
    return ANSI_PATTERN.sub("", text)


class FakeClock:
    """Settable clock returning epoch seconds."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clock():
    """A frozen, manually advanced clock."""
    return FakeClock()


@pytest.fixture
def memory_store():
    """An in-memory record store."""
    return MemoryRecordStore()


@pytest.fixture
def sample_usage_response():
    """Sample usage API response."""
    return {
        "five_hour": {"utilization": 41.6, "resets_at": "2025-06-01T17:00:00+00:00"},
        "seven_day": {"utilization": 12.2, "resets_at": "2025-06-04T09:00:00+00:00"},
        "extra_usage": {
            "is_enabled": True,
            "used_credits": 1250,
            "monthly_limit": 5000,
            "utilization": 25.0,
        },
    }


@pytest.fixture
def sample_snapshot_dict():
    """Sample host snapshot as a dictionary."""
    return {
        "session_id": "abc123def456ghi789",
        "cwd": "/home/dev/proj/src",
        "model": {"id": "claude-x", "display_name": "Opus"},
        "workspace": {"current_dir": "/home/dev/proj/src", "project_dir": "/home/dev/proj"},
        "cost": {"total_cost_usd": 1.234},
        "agent": {"name": "reviewer"},
        "vim": {"mode": "NORMAL"},
        "context_window": {
            "context_window_size": 100000,
            "used_percentage": 10,
            "current_usage": {
                "input_tokens": 10000,
                "cache_creation_input_tokens": 0,
                "cache_read_input_tokens": 0,
            },
        },
    }


@pytest.fixture
def sample_snapshot_json(sample_snapshot_dict):
    """Sample host snapshot as raw JSON."""
    return json.dumps(sample_snapshot_dict)

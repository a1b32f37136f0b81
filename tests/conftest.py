"""
Shared test fixtures.

Provides pytest fixtures for:
- An isolated data directory
- Config files written from dictionaries
- Fake feed lookup and URL builder collaborators that record their calls
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest
import yaml

from feedsync.core.context import Context
from feedsync.core.errors import FeedNotFoundError
from feedsync.core.models import FeedRecord


class FakeLookup:
    """Feed lookup backed by a dict, failing for ids listed in fail_ids."""

    def __init__(self, records: Dict[str, FeedRecord], fail_ids: Tuple[str, ...] = ()):
        self.records = records
        self.fail_ids = set(fail_ids)
        self.calls: List[str] = []

    def get_feed(self, ctx: Context, feed_id: str) -> FeedRecord:
        self.calls.append(feed_id)
        if feed_id in self.fail_ids or feed_id not in self.records:
            raise FeedNotFoundError(feed_id)
        return self.records[feed_id]


class FakeURLBuilder:
    """URL builder returning predictable URLs, failing for listed filenames."""

    def __init__(self, fail_filenames: Tuple[str, ...] = ()):
        self.fail_filenames = set(fail_filenames)
        self.calls: List[Tuple[str, str]] = []

    def url(self, ctx: Context, namespace: str, filename: str) -> str:
        self.calls.append((namespace, filename))
        if filename in self.fail_filenames:
            raise RuntimeError(f"no storage for {filename}")
        return f"https://feeds.example.com/{filename}"


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore root logger handlers replaced by FeedsyncApp."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch) -> Path:
    """
    Point the feedsync data directory at a temporary directory.

    Yields:
        Path: Temporary data directory
    """
    path = tmp_path / "data"
    monkeypatch.setenv("FEEDSYNC_DATA_DIR", str(path))
    monkeypatch.delenv("FEEDSYNC_CONFIG", raising=False)
    return path


@pytest.fixture
def write_config(tmp_path: Path):
    """Return a helper that writes a config dict as YAML and returns its path."""

    def _write(data: Dict[str, Any], name: str = "config.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def records() -> Dict[str, FeedRecord]:
    """Stored records for three feeds."""
    return {
        "tech": FeedRecord(id="tech", title="Tech Talks", description="Weekly tech talks"),
        "music": FeedRecord(id="music", title="Music", description="Live sessions"),
        "motion": FeedRecord(id="motion", title="Motion", description="Motion graphics"),
    }


@pytest.fixture
def fake_lookup():
    """Return the FakeLookup class so tests can configure failures."""
    return FakeLookup


@pytest.fixture
def fake_url_builder():
    """Return the FakeURLBuilder class so tests can configure failures."""
    return FakeURLBuilder

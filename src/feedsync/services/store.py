"""Stored feed metadata for feedsync."""

import json
import logging
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..core.context import Context
from ..core.errors import FeedNotFoundError
from ..core.models import FeedRecord
from ..utils.paths import get_feeds_file_path


class AtomicWriter:
    """Atomic writer for a JSON object file."""

    def __init__(self, file_path: Path):
        self.file_path = file_path

    def write_all(self, data: Dict[str, Any]) -> None:
        """Atomically replace the file contents with data."""
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

        temp_path: Optional[Path] = None
        try:
            with tempfile.NamedTemporaryFile(
                mode='w', encoding='utf-8', dir=self.file_path.parent, delete=False, suffix='.tmp'
            ) as tmp_file:
                temp_path = Path(tmp_file.name)
                json.dump(data, tmp_file, indent=2, ensure_ascii=False)
                tmp_file.flush()

            temp_path.replace(self.file_path)

        except (OSError, TypeError, ValueError) as e:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise IOError(f"Failed to write {self.file_path}: {e}") from e

    def read_all(self) -> Dict[str, Any]:
        """
        Load the JSON object from the file.

        Raises:
            IOError: If the file exists but cannot be read or parsed
        """
        if not self.file_path.exists():
            return {}

        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise IOError(f"Failed to read {self.file_path}: {e}") from e

        if not isinstance(data, dict):
            raise IOError(f"Expected a JSON object in {self.file_path}")
        return data


class FeedStore:
    """Feed metadata keyed by feed id, kept in a JSON file."""

    def __init__(self, feeds_file: Optional[Path] = None):
        """
        Initialize the feed store.

        Args:
            feeds_file: Optional path to the feeds file. If None, uses default path.
        """
        if feeds_file is None:
            feeds_file = get_feeds_file_path()

        self.feeds_file = feeds_file
        self.writer = AtomicWriter(feeds_file)

    def get_feed(self, ctx: Context, feed_id: str) -> FeedRecord:
        """
        Get the stored record for a feed.

        Args:
            ctx: Cancellation context
            feed_id: Feed identifier

        Returns:
            FeedRecord for the feed

        Raises:
            FeedNotFoundError: If no record is stored for feed_id
            IOError: If the feeds file is unreadable
        """
        ctx.check()

        data = self.writer.read_all().get(feed_id)
        if data is None:
            raise FeedNotFoundError(feed_id)

        try:
            return FeedRecord.model_validate({**data, "id": feed_id})
        except ValidationError as e:
            raise IOError(f"Corrupt record for feed {feed_id!r}: {e}") from e

    def add_feed(self, record: FeedRecord) -> None:
        """
        Store a feed record, replacing any previous one with the same id.

        Args:
            record: Feed record to store
        """
        feeds = self.writer.read_all()
        replaced = record.id in feeds
        feeds[record.id] = record.model_dump(mode="json", exclude={"id"})
        self.writer.write_all(feeds)

        if replaced:
            logging.info(f"Updated feed {record.id!r}")
        else:
            logging.info(f"Added feed {record.id!r}")

    def remove_feed(self, feed_id: str) -> bool:
        """
        Remove a stored feed.

        Args:
            feed_id: Feed identifier

        Returns:
            True if the feed was removed, False if it didn't exist
        """
        feeds = self.writer.read_all()

        if feed_id not in feeds:
            return False

        del feeds[feed_id]
        self.writer.write_all(feeds)

        logging.info(f"Removed feed {feed_id!r}")
        return True

    def list_feeds(self) -> List[FeedRecord]:
        """
        List all stored feeds.

        Returns:
            Feed records in storage order
        """
        feeds = self.writer.read_all()
        return [
            FeedRecord.model_validate({**data, "id": feed_id})
            for feed_id, data in feeds.items()
        ]

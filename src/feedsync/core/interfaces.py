"""Collaborator interfaces consumed by the OPML exporter."""

from typing import Protocol

from .context import Context
from .models import FeedRecord


class FeedLookup(Protocol):
    """Reads stored feed metadata by id."""

    def get_feed(self, ctx: Context, feed_id: str) -> FeedRecord:
        """Return the record for feed_id or raise FeedNotFoundError."""
        ...


class DownloadURLBuilder(Protocol):
    """Builds the public download URL of a stored file."""

    def url(self, ctx: Context, namespace: str, filename: str) -> str:
        ...

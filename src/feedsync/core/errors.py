"""Exceptions raised by feedsync."""

from enum import Enum
from typing import Optional


class ClassificationFailure(str, Enum):
    """Reasons an address could not be resolved into a feed source."""

    MALFORMED_URL = "malformed url"
    UNSUPPORTED_HOST = "unsupported URL host"
    UNSUPPORTED_LINK_FORMAT = "unsupported link format"
    INVALID_PLAYLIST_LINK = "invalid playlist link"
    INVALID_CHANNEL_LINK = "invalid channel link"
    INVALID_USER_LINK = "invalid user link"
    INVALID_ID = "invalid id"
    INVALID_PATH = "invalid link path"


class ExportFailure(str, Enum):
    """Reasons an OPML export was aborted."""

    FEED_LOOKUP_FAILED = "failed to look up feed"
    URL_BUILD_FAILED = "failed to get feed URL"
    SERIALIZATION_FAILED = "failed to marshal OPML"


class FeedsyncError(Exception):
    """Base class for all feedsync errors."""


class ConfigError(FeedsyncError):
    """Configuration file could not be loaded or is invalid."""


class ClassificationError(FeedsyncError):
    """An address could not be resolved into a feed source."""

    def __init__(self, reason: ClassificationFailure, address: str):
        self.reason = reason
        self.address = address
        super().__init__(f"{reason.value}: {address}")


class ExportError(FeedsyncError):
    """An OPML export was aborted."""

    def __init__(self, reason: ExportFailure, feed_id: Optional[str] = None):
        self.reason = reason
        self.feed_id = feed_id
        if feed_id is None:
            message = reason.value
        else:
            message = f"{reason.value} {feed_id!r}"
        super().__init__(message)


class ExportCancelled(FeedsyncError):
    """The caller cancelled the export or its deadline passed."""


class FeedNotFoundError(FeedsyncError):
    """No stored record exists for a feed id."""

    def __init__(self, feed_id: str):
        self.feed_id = feed_id
        super().__init__(f"feed not found: {feed_id}")

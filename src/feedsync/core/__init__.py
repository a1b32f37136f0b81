"""Core link classification and OPML export."""

from .errors import (
    ClassificationError,
    ClassificationFailure,
    ExportCancelled,
    ExportError,
    ExportFailure,
    FeedNotFoundError,
    FeedsyncError,
)
from .models import FeedRecord, LinkType, Provider, ResolvedSource

__all__ = [
    "ClassificationError",
    "ClassificationFailure",
    "ExportCancelled",
    "ExportError",
    "ExportFailure",
    "FeedNotFoundError",
    "FeedsyncError",
    "FeedRecord",
    "LinkType",
    "Provider",
    "ResolvedSource",
]

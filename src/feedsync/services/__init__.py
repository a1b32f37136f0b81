"""Service layer for feedsync."""

from .store import FeedStore
from .urls import HostURLBuilder

__all__ = ["FeedStore", "HostURLBuilder"]

"""Feedsync: resolve video-hosting links into feed sources and export OPML."""

__version__ = "0.1.0"

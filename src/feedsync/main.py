"""Main feedsync application."""

import logging
from pathlib import Path
from typing import Dict, Optional

from .config import Config, load_config
from .core.classify import SourceClassifier
from .core.context import Context
from .core.models import FeedRecord, ResolvedSource
from .core.opml import build_opml
from .services.store import FeedStore
from .services.urls import HostURLBuilder
from .utils.paths import get_log_dir, get_project_dir


class FeedsyncApp:
    """Main feedsync application."""

    def __init__(self, config_file: Optional[Path] = None, config: Optional[Config] = None):
        """
        Initialize the feedsync application.

        Args:
            config_file: Optional path to configuration file
            config: Already loaded configuration, skips loading config_file
        """
        self.config_file = config_file
        self.config = config if config is not None else load_config(config_file)

        self._setup_logging()

        self.classifier = SourceClassifier(self.config.classification)
        self.store = FeedStore(self.config.storage.get_feeds_file())
        self.url_builder = HostURLBuilder(self.config.server.hostname)

        logging.debug("Feedsync initialized")

    def _setup_logging(self) -> None:
        """Setup logging configuration."""
        log_file = get_log_dir() / "feedsync.log"

        # Convert string log level to logging constant
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()
        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)

    def set_verbose(self) -> None:
        """Switch all logging output to DEBUG."""
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)
        for handler in root_logger.handlers:
            handler.setLevel(logging.DEBUG)

    def classify(self, url: str) -> ResolvedSource:
        """Resolve a link with the configured classifier."""
        return self.classifier.classify(url)

    def register(self, feed_id: str, url: str, title: str = "", description: str = "") -> FeedRecord:
        """
        Classify a link and store it as a feed.

        Args:
            feed_id: Identifier to store the feed under
            url: Provider link as typed by the user
            title: Feed title used in the OPML export
            description: Feed description used in the OPML export

        Returns:
            The stored feed record

        Raises:
            ClassificationError: If the link cannot be classified
        """
        source = self.classifier.classify(url)
        record = FeedRecord(
            id=feed_id,
            title=title or str(source),
            description=description,
            url=url,
            source=source,
        )
        self.store.add_feed(record)
        logging.info(f"Registered feed {feed_id!r} as {source}")
        return record

    def export_opml(self, timeout: Optional[float] = None, ctx: Optional[Context] = None) -> str:
        """
        Export the configured feeds as OPML.

        Args:
            timeout: Optional deadline in seconds for the whole export
            ctx: Caller-owned context, takes precedence over timeout

        Returns:
            OPML XML string
        """
        if ctx is None:
            ctx = Context(timeout=timeout)

        logging.info(f"Exporting OPML for {len(self.config.feeds)} configured feeds")
        return build_opml(
            ctx,
            self.config.feed_list,
            self.store,
            self.url_builder,
            title=self.config.opml_title,
        )

    def get_info(self) -> Dict:
        """
        Get application information.

        Returns:
            Dictionary with application info
        """
        from . import __version__

        return {
            "version": __version__,
            "project_dir": str(get_project_dir()),
            "config_file": str(self.config_file) if self.config_file else "default",
            "feeds_file": str(self.store.feeds_file),
            "hostname": self.config.server.hostname,
            "log_level": self.config.log_level,
            "total_feeds": len(self.config.feeds),
            "opml_feeds": len([f for f in self.config.feed_list if f.opml]),
            "stored_feeds": len(self.store.list_feeds()),
        }

"""Configuration management for feedsync."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, validator
from pydantic import ConfigDict, ValidationError, model_validator

from .core.errors import ConfigError
from .core.models import ResolvedSource
from .utils.paths import get_config_file_path, get_feeds_file_path


class FeedConfig(BaseModel):
    """Configuration for a single feed."""

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    url: str
    opml: bool = Field(default=False, description="Include this feed in the OPML export")
    page_size: int = Field(default=50, description="Number of episodes to keep in the feed")
    format: str = Field(default="video", description="Episode format: audio|video")
    quality: str = Field(default="high", description="Episode quality: high|low")
    update_period: str = Field(default="6h", description="How often the feed is refreshed")
    source: Optional[ResolvedSource] = Field(default=None, exclude=True)

    @validator('format')
    def validate_format(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in {"audio", "video"}:
            raise ValueError("Format must be one of ['audio', 'video']")
        return normalized

    @validator('quality')
    def validate_quality(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in {"high", "low"}:
            raise ValueError("Quality must be one of ['high', 'low']")
        return normalized

    @validator('page_size')
    def validate_page_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Page size must be positive")
        return value


class ClassificationConfig(BaseModel):
    """Configuration for link classification."""

    youtube_domain: str = "youtube.com"
    vimeo_domain: str = "vimeo.com"
    default_scheme: str = "https"


class ServerConfig(BaseModel):
    """Configuration for the server that hosts rendered feeds."""

    hostname: str = "http://localhost:8080"

    @validator('hostname')
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")


class StorageConfig(BaseModel):
    """Configuration for stored feed metadata."""

    feeds_file: Optional[str] = None

    @validator('feeds_file')
    def expand_feeds_file(cls, v):
        if not v:
            return None
        return str(Path(v).expanduser())

    def get_feeds_file(self) -> Path:
        """Resolve the feeds file, falling back to the data directory."""
        if self.feeds_file:
            return Path(self.feeds_file)
        return get_feeds_file_path()


class Config(BaseModel):
    """Main configuration for feedsync."""

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _apply_feed_ids(cls, data: Any) -> Any:
        """Copy feed ids from the mapping keys into each feed entry."""
        if not isinstance(data, dict):
            return data

        data = data.copy()

        feeds = data.get("feeds")
        if feeds is None:
            data["feeds"] = {}
        elif isinstance(feeds, dict):
            normalized = {}
            for feed_id, feed in feeds.items():
                if isinstance(feed, str):
                    feed = {"url": feed}
                elif isinstance(feed, dict):
                    feed = dict(feed)
                elif isinstance(feed, FeedConfig):
                    feed = feed.model_dump()
                feed["id"] = str(feed_id)
                normalized[str(feed_id)] = feed
            data["feeds"] = normalized

        return data

    feeds: Dict[str, FeedConfig] = Field(default_factory=dict)
    server: ServerConfig = Field(default_factory=ServerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)
    opml_title: str = Field(default="Podcast feeds", description="Title of the exported OPML document")
    log_level: str = Field(default="INFO", description="Logging level")

    @validator('log_level')
    def validate_log_level(cls, v):
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v.upper()

    @property
    def feed_list(self) -> List[FeedConfig]:
        """Feeds in configuration file order."""
        return list(self.feeds.values())

    def resolve_sources(self) -> None:
        """
        Classify every feed URL and attach the result to its feed.

        Raises:
            ConfigError: If any feed URL cannot be classified
        """
        from .core.classify import SourceClassifier
        from .core.errors import ClassificationError

        classifier = SourceClassifier(self.classification)
        for feed in self.feeds.values():
            try:
                feed.source = classifier.classify(feed.url)
            except ClassificationError as e:
                raise ConfigError(f"Invalid URL for feed {feed.id!r}: {e}") from e


def load_config(config_file: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_file: Optional path to config file. If None, uses default path.

    Returns:
        Config object with feed sources resolved

    Raises:
        ConfigError: If the file cannot be parsed or fails validation
    """
    if config_file is None:
        config_file = get_config_file_path()

    if not config_file.exists():
        # Create default config
        config = Config()
        save_config(config, config_file)
        logging.info(f"Created default config at {config_file}")
        return config

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        config = Config(**data)
    except (yaml.YAMLError, ValidationError, TypeError) as e:
        logging.error(f"Error loading config from {config_file}: {e}")
        raise ConfigError(f"Error loading config from {config_file}: {e}") from e

    config.resolve_sources()
    logging.debug(f"Loaded config from {config_file} with {len(config.feeds)} feeds")
    return config


def _config_to_dict(config: Config) -> Dict[str, Any]:
    data = config.model_dump(mode="json")
    for feed in data["feeds"].values():
        feed.pop("id", None)
    return data


def save_config(config: Config, config_file: Optional[Path] = None) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Config object to save
        config_file: Optional path to config file. If None, uses default path.
    """
    if config_file is None:
        config_file = get_config_file_path()

    config_file.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(_config_to_dict(config), f, default_flow_style=False, indent=2, sort_keys=False)

        logging.debug(f"Saved config to {config_file}")

    except (OSError, yaml.YAMLError) as e:
        logging.error(f"Error saving config to {config_file}: {e}")
        raise


def create_example_config() -> str:
    """Create an example configuration YAML string."""
    example_config = Config(
        feeds={
            "tech": FeedConfig(
                url="https://www.youtube.com/channel/UC5XPnUk8Vvv_pWslhwom6Og",
                opml=True,
                page_size=30,
            ),
            "talks": FeedConfig(
                url="https://www.youtube.com/playlist?list=PLCB9F975ECF01953C",
                opml=True,
                format="audio",
            ),
            "motion": FeedConfig(
                url="vimeo.com/groups/motion",
                quality="low",
            ),
        },
        server=ServerConfig(hostname="https://feeds.example.com"),
        opml_title="Podcast feeds",
        log_level="INFO",
    )

    return yaml.safe_dump(_config_to_dict(example_config), default_flow_style=False, indent=2, sort_keys=False)

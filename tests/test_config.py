"""Tests for configuration loading."""

import pytest
import yaml

from feedsync.config import Config, FeedConfig, create_example_config, load_config, save_config
from feedsync.core.errors import ConfigError
from feedsync.core.models import LinkType, Provider


def test_load_config_preserves_feed_order_and_ids(write_config) -> None:
    path = write_config({
        "server": {"hostname": "https://feeds.example.com/"},
        "feeds": {
            "zeta": {"url": "youtube.com/user/zeta", "opml": True},
            "alpha": {"url": "https://vimeo.com/groups/alpha"},
            "mid": "https://www.youtube.com/playlist?list=PL123",
        },
    })

    config = load_config(path)

    assert [feed.id for feed in config.feed_list] == ["zeta", "alpha", "mid"]
    assert config.feeds["zeta"].opml is True
    assert config.feeds["alpha"].opml is False
    assert config.server.hostname == "https://feeds.example.com"


def test_load_config_resolves_sources(write_config) -> None:
    path = write_config({"feeds": {"motion": {"url": "vimeo.com/groups/motion"}}})

    source = load_config(path).feeds["motion"].source

    assert source.provider is Provider.VIMEO
    assert source.link_type is LinkType.GROUP
    assert source.item_id == "motion"


def test_invalid_feed_url_names_feed(write_config) -> None:
    path = write_config({"feeds": {"broken": {"url": "https://example.com/foo"}}})

    with pytest.raises(ConfigError, match="broken"):
        load_config(path)


@pytest.mark.parametrize(
    "feed",
    [
        {"url": "youtube.com/user/x", "format": "flac"},
        {"url": "youtube.com/user/x", "quality": "ultra"},
        {"url": "youtube.com/user/x", "page_size": 0},
        {"opml": True},
    ],
)
def test_invalid_feed_settings(write_config, feed) -> None:
    path = write_config({"feeds": {"x": feed}})

    with pytest.raises(ConfigError):
        load_config(path)


def test_invalid_log_level(write_config) -> None:
    with pytest.raises(ConfigError):
        load_config(write_config({"log_level": "loud"}))


def test_log_level_is_normalized() -> None:
    assert Config(log_level="debug").log_level == "DEBUG"


def test_malformed_yaml(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("feeds: [unclosed", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_missing_config_creates_default(tmp_path) -> None:
    path = tmp_path / "nested" / "config.yaml"

    config = load_config(path)

    assert path.exists()
    assert config.feeds == {}
    assert config.opml_title == "Podcast feeds"


def test_save_and_load_keeps_feeds(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    config = Config(feeds={"tech": FeedConfig(url="youtube.com/channel/UC1", opml=True, format="audio")})

    save_config(config, path)
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    loaded = load_config(path)

    assert "id" not in data["feeds"]["tech"]
    assert "source" not in data["feeds"]["tech"]
    assert loaded.feeds["tech"].id == "tech"
    assert loaded.feeds["tech"].format == "audio"
    assert loaded.feeds["tech"].source.item_id == "UC1"


def test_example_config_is_loadable(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(create_example_config(), encoding="utf-8")

    config = load_config(path)

    assert list(config.feeds) == ["tech", "talks", "motion"]
    assert [feed.opml for feed in config.feed_list] == [True, True, False]


def test_default_config_path_uses_data_dir(data_dir) -> None:
    config = load_config()

    assert config.feeds == {}
    assert (data_dir / "config.yaml").exists()

"""Tests for the feedsync command line."""

import json
from xml.etree import ElementTree as ET

import pytest
from typer.testing import CliRunner

from feedsync.cli import app

runner = CliRunner()


@pytest.fixture
def config_path(data_dir, write_config):
    return write_config({
        "server": {"hostname": "https://feeds.example.com"},
        "storage": {"feeds_file": str(data_dir / "feeds.json")},
        "opml_title": "My feeds",
        "feeds": {
            "tech": {"url": "youtube.com/channel/UC5XPnUk8Vvv_pWslhwom6Og", "opml": True},
            "motion": {"url": "vimeo.com/groups/motion", "opml": False},
        },
    })


def test_classify_command(data_dir) -> None:
    result = runner.invoke(app, ["classify", "https://vimeo.com/groups/test"])

    assert result.exit_code == 0
    assert "vimeo" in result.output
    assert "group" in result.output
    assert "test" in result.output


def test_classify_command_json(data_dir) -> None:
    result = runner.invoke(app, ["classify", "--json", "https://www.youtube.com/playlist?list=PLCB9F975ECF01953C"])

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "provider": "youtube",
        "link_type": "playlist",
        "item_id": "PLCB9F975ECF01953C",
    }


def test_classify_command_error(data_dir) -> None:
    result = runner.invoke(app, ["classify", "https://example.com/foo"])

    assert result.exit_code == 1
    assert "unsupported URL host" in result.output


def test_classify_command_uses_configured_domains(data_dir, write_config) -> None:
    path = write_config({"classification": {"youtube_domain": "yt.local"}}, name="custom.yaml")

    result = runner.invoke(app, ["classify", "--json", "yt.local/user/someone", "-c", str(path)])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"provider": "youtube", "link_type": "user", "item_id": "someone"}

    result = runner.invoke(app, ["classify", "youtube.com/user/someone", "-c", str(path)])
    assert result.exit_code == 1
    assert "unsupported URL host" in result.output


def test_add_list_remove(config_path) -> None:
    result = runner.invoke(app, ["add", "tech", "youtube.com/user/fxigr1", "--title", "Tech", "-c", str(config_path)])
    assert result.exit_code == 0
    assert "youtube/user/fxigr1" in result.output

    result = runner.invoke(app, ["list", "-c", str(config_path)])
    assert result.exit_code == 0
    assert "tech" in result.output
    assert "Tech" in result.output

    result = runner.invoke(app, ["remove", "tech", "-c", str(config_path)])
    assert result.exit_code == 0

    result = runner.invoke(app, ["remove", "tech", "-c", str(config_path)])
    assert result.exit_code == 1


def test_add_rejects_bad_link(config_path) -> None:
    result = runner.invoke(app, ["add", "tech", "https://www.youtube.com/channel/", "-c", str(config_path)])

    assert result.exit_code == 1
    assert "invalid channel link" in result.output


def test_opml_export_to_file(config_path, tmp_path) -> None:
    runner.invoke(app, ["add", "tech", "youtube.com/channel/UC5XPnUk8Vvv_pWslhwom6Og", "-t", "Tech", "-d", "Talks", "-c", str(config_path)])
    runner.invoke(app, ["add", "motion", "vimeo.com/groups/motion", "-c", str(config_path)])
    output = tmp_path / "out" / "feeds.opml"

    result = runner.invoke(app, ["opml", "-o", str(output), "-c", str(config_path)])

    assert result.exit_code == 0
    root = ET.fromstring(output.read_bytes())
    assert root.find("head/title").text == "My feeds"
    outlines = root.findall("body/outline")
    assert len(outlines) == 1
    assert outlines[0].get("title") == "Tech"
    assert outlines[0].get("text") == "Talks"
    assert outlines[0].get("xmlUrl") == "https://feeds.example.com/tech.xml"


def test_opml_export_fails_for_unregistered_feed(config_path) -> None:
    result = runner.invoke(app, ["opml", "-c", str(config_path)])

    assert result.exit_code == 1
    assert "failed to look up feed 'tech'" in result.output


def test_config_example() -> None:
    result = runner.invoke(app, ["config", "--example"])

    assert result.exit_code == 0
    assert "feeds:" in result.output


def test_info(config_path) -> None:
    result = runner.invoke(app, ["info", "-c", str(config_path)])

    assert result.exit_code == 0
    assert "Configured feeds: 2" in result.output
    assert "OPML feeds: 1" in result.output

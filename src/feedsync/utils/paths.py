"""Path utilities for feedsync."""

import os
from pathlib import Path

DATA_DIR_ENV = "FEEDSYNC_DATA_DIR"
CONFIG_FILE_ENV = "FEEDSYNC_CONFIG"


def get_project_dir() -> Path:
    """
    Get the data directory.

    Uses $FEEDSYNC_DATA_DIR when set, otherwise ~/.feedsync.

    Returns:
        Path to the data directory
    """
    data_dir = os.environ.get(DATA_DIR_ENV)
    if data_dir:
        return Path(data_dir).expanduser()
    return Path.home() / ".feedsync"


def get_config_file_path() -> Path:
    """Get the path to the configuration file."""
    config_file = os.environ.get(CONFIG_FILE_ENV)
    if config_file:
        return Path(config_file).expanduser()
    return get_project_dir() / "config.yaml"


def get_feeds_file_path() -> Path:
    """Get the path to the stored feed metadata."""
    return get_project_dir() / "feeds.json"


def get_log_dir() -> Path:
    """Get the log directory path."""
    log_dir = get_project_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir

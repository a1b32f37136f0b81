"""Utility functions for feedsync."""

from .paths import (
    get_project_dir,
    get_config_file_path,
    get_feeds_file_path,
    get_log_dir
)

__all__ = [
    "get_project_dir",
    "get_config_file_path",
    "get_feeds_file_path",
    "get_log_dir"
]

"""Utility modules for pkg-cmd."""

from .git import get_git_config_path, get_origin_url

__all__ = [
    "get_git_config_path",
    "get_origin_url",
]

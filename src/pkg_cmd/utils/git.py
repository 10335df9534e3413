"""
Git utilities for pkg-cmd.

Reads the repository configuration of the project being initialized.
"""

from __future__ import annotations

import subprocess
from pathlib import Path


def get_git_config_path(project_dir: Path) -> Path:
    """Path of the repository config file for ``project_dir``."""
    return project_dir / ".git" / "config"


def get_origin_url(config_path: Path) -> str | None:
    """Read ``remote.origin.url`` from a git config file.

    Args:
        config_path: Path to a git config file (usually ``.git/config``)

    Returns:
        The origin URL, or None if the file has no origin remote, cannot
        be read, or git is not installed
    """
    if not config_path.is_file():
        return None

    try:
        result = subprocess.run(
            ["git", "config", "--file", str(config_path), "--get", "remote.origin.url"],
            capture_output=True,
            text=True,
            check=False,
        )
    except (OSError, FileNotFoundError):
        # Git not installed
        return None

    if result.returncode != 0:
        return None
    url = result.stdout.strip()
    return url or None

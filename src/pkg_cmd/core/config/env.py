"""
Layered .env loading for PKG_CMD_* settings.

Values are collected from the user env file
(``$XDG_CONFIG_HOME/pkg-cmd/.env``) and then from the project's ``.env``
and ``.env.local``, later files winning. Variables already exported in
the shell are never replaced, so CI and one-off overrides always apply.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from dotenv import dotenv_values

from .loader import get_xdg_config_home

logger = logging.getLogger(__name__)

PROJECT_ENV_FILES = (".env", ".env.local")


def get_user_env_path() -> Path:
    """Path of the per-user env file."""
    return get_xdg_config_home() / "pkg-cmd" / ".env"


def _collect(paths: Iterable[Path]) -> dict[str, str]:
    collected: dict[str, str] = {}
    for path in paths:
        if not path.is_file():
            continue
        values = {k: v for k, v in dotenv_values(path).items() if k and v is not None}
        logger.debug("Read %d variables from %s", len(values), path)
        collected.update(values)
    return collected


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> dict[str, str]:
    """
    Export variables from the user and project env files.

    Args:
        project_dir: Directory holding the project env files (defaults to cwd)
        user_env_paths: Override the user env file locations
        project_env_paths: Override the project env file locations

    Returns:
        The variables that were exported
    """
    project_dir = project_dir or Path.cwd()
    if user_env_paths is None:
        user_env_paths = [get_user_env_path()]
    if project_env_paths is None:
        project_env_paths = [project_dir / name for name in PROJECT_ENV_FILES]

    layered = _collect(Path(p) for p in user_env_paths)
    layered.update(_collect(Path(p) for p in project_env_paths))

    exported = {key: value for key, value in layered.items() if key not in os.environ}
    os.environ.update(exported)
    return exported

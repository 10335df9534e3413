"""
Loading pkg-cmd configuration.

Layers, lowest precedence first:

    defaults -> ~/.config/pkg-cmd/config.json -> <project>/.pkg-cmd.json -> PKG_CMD_* env

Each file layer is a partial JSON object deep-merged over the previous
result; the merged dict is validated once by PkgCmdConfig.
"""

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .models import PkgCmdConfig

logger = logging.getLogger(__name__)

USER_CONFIG_DIR = "pkg-cmd"
USER_CONFIG_FILE = "config.json"
PROJECT_CONFIG_FILE = ".pkg-cmd.json"

_config_cache: PkgCmdConfig | None = None


def _timeout(raw: str) -> float:
    value = float(raw)
    if value < 0:
        raise ValueError("must be >= 0")
    return value


# env var -> (config path, parser)
ENV_OVERRIDES: dict[str, tuple[tuple[str, ...], Callable[[str], Any]]] = {
    "PKG_CMD_COMMAND_NAME": (("command_name",), str),
    "PKG_CMD_DEFAULT_LICENSE": (("default_license",), str),
    "PKG_CMD_GITIGNORE_URL": (("sources", "gitignore"), str),
    "PKG_CMD_CODE_OF_CONDUCT_URL": (("sources", "code_of_conduct"), str),
    "PKG_CMD_LICENSE_TEXT_URL": (("sources", "license_text"), str),
    "PKG_CMD_HTTP_TIMEOUT": (("http", "timeout"), _timeout),
}


def get_xdg_config_home() -> Path:
    """$XDG_CONFIG_HOME, falling back to ~/.config."""
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    return get_xdg_config_home() / USER_CONFIG_DIR / USER_CONFIG_FILE


def get_project_config_path(project_dir: Path | None = None) -> Path:
    return (project_dir or Path.cwd()) / PROJECT_CONFIG_FILE


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Return a new dict with ``override`` layered over ``base``.

    Nested objects merge key by key; any other value in ``override``
    replaces the one in ``base``. Neither argument is modified.

    Example:
        >>> deep_merge({"sources": {"gitignore": "a"}}, {"sources": {"code_of_conduct": "b"}})
        {'sources': {'gitignore': 'a', 'code_of_conduct': 'b'}}
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Read one config layer.

    Returns:
        The parsed object, or None when the file is missing, unreadable,
        not valid JSON, or not a JSON object. Broken layers are logged and
        skipped rather than aborting the command.
    """
    if not path.is_file():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Ignoring config at %s: top level is not an object", path)
        return None
    return data


def _set_path(config_dict: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    node = config_dict
    for key in path[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    node[path[-1]] = value


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Layer PKG_CMD_* environment variables over ``config_dict``.

    Empty variables are ignored. A value its parser rejects (for example
    a negative PKG_CMD_HTTP_TIMEOUT) is logged and ignored.
    """
    result = deep_merge({}, config_dict)

    for env_name, (path, parse) in ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if not raw:
            continue
        try:
            value = parse(raw)
        except ValueError as e:
            logger.warning("Ignoring %s=%r: %s", env_name, raw, e)
            continue
        _set_path(result, path, value)

    return result


def get_default_config() -> dict[str, Any]:
    return PkgCmdConfig().model_dump()


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> PkgCmdConfig:
    """
    Build the effective configuration for ``project_dir``.

    Args:
        project_dir: Directory whose .pkg-cmd.json is used (defaults to cwd)
        use_cache: Reuse the config from an earlier call in this process

    Raises:
        ValidationError: The merged layers do not form a valid PkgCmdConfig
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()
    for path in (get_user_config_path(), get_project_config_path(project_dir)):
        layer = load_json_file(path)
        if layer:
            logger.debug("Applying config layer %s", path)
            merged = deep_merge(merged, layer)

    config = PkgCmdConfig(**apply_env_overrides(merged))
    _config_cache = config
    return config


def clear_cache() -> None:
    """Forget the cached config so the next load_config re-reads every layer."""
    global _config_cache
    _config_cache = None

"""
Configuration models and loading.

This module provides Pydantic models for pkg-cmd configuration
with multi-layer merging: defaults < user < project < env vars.
"""

from .loader import (
    clear_cache,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import HttpConfig, PkgCmdConfig, SourcesConfig

__all__ = [
    # Models
    "HttpConfig",
    "PkgCmdConfig",
    "SourcesConfig",
    # Loader functions
    "clear_cache",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
]

"""
pkg-cmd - common package tasks for Node and Go projects.

``pkg-cmd init`` sets up a new project (or refreshes an existing one)
with a manifest, license, code of conduct, README and tooling configs.
"""

__version__ = "0.1.0"

from pkg_cmd.core.config.models import PkgCmdConfig
from pkg_cmd.core.init.models import ConfigDelta, Language, ProbedState

__all__ = ["ConfigDelta", "Language", "PkgCmdConfig", "ProbedState", "__version__"]

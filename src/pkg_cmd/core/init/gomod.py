"""Minimal go.mod reader: only the module path and go version are extracted."""

import re

from pkg_cmd.core.init.models import GoModule

MODULE_PREFIX = "module "
GO_PREFIX = "go "

SCHEME_PREFIX = re.compile(r"^[^:]+://")


def parse_go_mod(text: str) -> GoModule:
    """
    Parse the module path and go version out of go.mod text.

    Lines starting with ``module `` or ``go `` set the corresponding field;
    everything else is ignored. Never raises.

    Example:
        >>> parse_go_mod("module example.com/foo\\ngo 1.20\\n")
        GoModule(module='example.com/foo', go='1.20')
    """
    module = ""
    go = ""
    for line in text.splitlines():
        if line.startswith(MODULE_PREFIX):
            module = line[len(MODULE_PREFIX):].strip()
        elif line.startswith(GO_PREFIX):
            go = line[len(GO_PREFIX):].strip()
    return GoModule(module=module, go=go)


def module_path_from_remote(remote_url: str) -> str:
    """
    Derive a module path from a git remote URL by dropping any ``scheme://``.

    SSH remotes such as ``git@host:org/repo`` have no scheme and are
    returned unchanged; the result is not validated as a module path.

    Example:
        >>> module_path_from_remote("https://github.com/acme/widget")
        'github.com/acme/widget'
    """
    return SCHEME_PREFIX.sub("", remote_url, count=1)

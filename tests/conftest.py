"""
Pytest configuration and shared fixtures.

Provides temporary project directories, a scripted prompter that stands
in for the operator, and an Effects subclass that records commands and
downloads instead of touching git, npm, go or the network.
"""

import json
import re
from pathlib import Path
from typing import Any

import pytest

from pkg_cmd.core.config import clear_cache
from pkg_cmd.core.config.models import PkgCmdConfig
from pkg_cmd.core.init.effects import CommandError, Effects

# Canonical MIT text as published in SPDX license-list-data
MIT_TEXT = """\
MIT License

Copyright (c) <year> <copyright holders>

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction.
"""

ORIGIN_URL = re.compile(r'\[remote "origin"\][^\[]*?url\s*=\s*(\S+)', re.DOTALL)

# Sentinel: accept whatever default the question offers
DEFAULT = object()


# ==============================================================================
# Fakes
# ==============================================================================


class ScriptedPrompter:
    """
    Prompter that replays a fixed list of answers.

    Every call is recorded as ``(kind, message, default)`` so tests can
    assert exactly which questions were asked and in what order.
    """

    def __init__(self, answers: list[Any]) -> None:
        self.answers = list(answers)
        self.calls: list[tuple[str, str, Any]] = []

    def _next(self, kind: str, message: str, default: Any) -> Any:
        self.calls.append((kind, message, default))
        if not self.answers:
            raise AssertionError(f"Unexpected question: {message!r}")
        answer = self.answers.pop(0)
        return default if answer is DEFAULT else answer

    def confirm(self, message: str, default: bool) -> bool:
        return bool(self._next("confirm", message, default))

    def text(self, message: str, default: str | None) -> str:
        answer = self._next("text", message, default)
        return "" if answer is None else str(answer)

    def select(self, message: str, choices: list[str], default: str | None) -> str:
        answer = self._next("select", message, default)
        assert answer in choices, f"{answer!r} is not one of the choices"
        return str(answer)

    @property
    def messages(self) -> list[str]:
        return [message for _, message, _ in self.calls]


class RecordingEffects(Effects):
    """
    Effects that writes files for real but only records commands and fetches.

    Args:
        project_dir: Project directory
        downloads: URL -> body; unknown URLs return a placeholder body
        fail_on: Commands (as tuples) that should raise CommandError
    """

    def __init__(
        self,
        project_dir: Path,
        downloads: dict[str, str] | None = None,
        fail_on: set[tuple[str, ...]] | None = None,
    ) -> None:
        super().__init__(project_dir)
        self.downloads = downloads or {}
        self.fail_on = fail_on or set()
        self.commands: list[list[str]] = []
        self.fetched: list[str] = []

    def run(self, args):
        self.commands.append(list(args))
        if tuple(args) in self.fail_on:
            raise CommandError(args, 1, "boom")
        return ""

    def fetch_text(self, url: str) -> str:
        self.fetched.append(url)
        return self.downloads.get(url, f"downloaded from {url}\n")


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config, env overrides and the config cache out of tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in (
        "PKG_CMD_COMMAND_NAME",
        "PKG_CMD_DEFAULT_LICENSE",
        "PKG_CMD_GITIGNORE_URL",
        "PKG_CMD_CODE_OF_CONDUCT_URL",
        "PKG_CMD_LICENSE_TEXT_URL",
        "PKG_CMD_HTTP_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_cache()
    yield
    clear_cache()


@pytest.fixture(autouse=True)
def origin_from_git_config(monkeypatch):
    """Read the origin remote from .git/config text instead of running git."""

    def read_origin(config_path: Path) -> str | None:
        if not config_path.is_file():
            return None
        match = ORIGIN_URL.search(config_path.read_text())
        return match.group(1) if match else None

    monkeypatch.setattr("pkg_cmd.core.init.probe.get_origin_url", read_origin)


@pytest.fixture
def project_dir(tmp_path):
    """Provide an empty project directory named 'demo'."""
    project = tmp_path / "demo"
    project.mkdir()
    return project


@pytest.fixture
def node_project(project_dir):
    """Project with a package.json, a git config and an MIT license."""
    manifest = {
        "name": "demo",
        "description": "A demo package",
        "author": "A",
        "license": "MIT",
        "scripts": {"test": "jest"},
    }
    (project_dir / "package.json").write_text(json.dumps(manifest, indent=2))
    (project_dir / "LICENSE").write_text("MIT License\n\nCopyright (c) 2020 A\n")
    git_dir = project_dir / ".git"
    git_dir.mkdir()
    (git_dir / "config").write_text("[core]\n\tbare = false\n")
    return project_dir


@pytest.fixture
def go_project(project_dir):
    """Project with a go.mod and a git config."""
    (project_dir / "go.mod").write_text("module github.com/acme/demo\n\ngo 1.21\n")
    git_dir = project_dir / ".git"
    git_dir.mkdir()
    (git_dir / "config").write_text(
        '[remote "origin"]\n\turl = https://github.com/acme/demo\n'
    )
    return project_dir


@pytest.fixture
def config():
    """Default tool configuration."""
    return PkgCmdConfig()


@pytest.fixture
def make_prompter():
    """Factory for ScriptedPrompter instances."""
    return ScriptedPrompter


@pytest.fixture
def make_effects():
    """Factory for RecordingEffects instances."""
    return RecordingEffects


@pytest.fixture
def default_answer():
    """Sentinel telling ScriptedPrompter to accept the offered default."""
    return DEFAULT


@pytest.fixture
def mit_text():
    return MIT_TEXT

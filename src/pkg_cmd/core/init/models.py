"""
Data models for project initialization.

ProbedState describes what is already on disk, ConfigDelta records what
the operator decided during the interview, and ProbeResult bundles the
probed state with the raw files the planner needs to clean up.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Language(str, Enum):
    """Project languages the wizard can set up."""

    NODE = "node"
    GO = "go"

    @property
    def manifest_name(self) -> str:
        """File that marks a project of this language as initialized."""
        return "package.json" if self is Language.NODE else "go.mod"

    @property
    def gitignore_template(self) -> str:
        """Template name in the github/gitignore repository."""
        return "Node" if self is Language.NODE else "Go"


@dataclass(frozen=True)
class FileRecord:
    """An existing file found while probing, relative to the project dir."""

    path: str
    content: str


@dataclass(frozen=True)
class GoModule:
    """Fields parsed from a go.mod file. Missing fields are empty strings."""

    module: str = ""
    go: str = ""


class ProbedState(BaseModel):
    """Project metadata read from disk before any question is asked."""

    model_config = ConfigDict(frozen=True)

    language: Language | None = None
    name: str | None = None
    description: str | None = None
    author: str | None = None
    license: str | None = None
    git_remote: str | None = None
    has_git: bool = False


class ConfigDelta(BaseModel):
    """
    Answers gathered during the interview.

    Only fields the operator actually decided are set; everything else
    stays None and falls back to the probed value.
    """

    model_config = ConfigDict(validate_assignment=True)

    language: Language | None = None
    name: str | None = None
    description: str | None = None
    author: str | None = None
    license: str | None = None
    initialize_git: bool | None = None
    git_remote: str | None = None
    add_pre_commit_linting: bool | None = None
    add_code_of_conduct: bool | None = None
    add_readme: bool | None = None

    def effective(self, field: str, probed: ProbedState) -> Any:
        """Delta value if the operator set it, else the probed value."""
        value = getattr(self, field)
        if value is not None:
            return value
        return getattr(probed, field, None)


class ProbeResult(BaseModel):
    """Everything the prober learned about the project directory."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    project_dir: Path
    state: ProbedState
    manifest: dict[str, Any] | None = None
    go_module: GoModule | None = None
    readme_files: list[FileRecord] = Field(default_factory=list)
    license_files: list[FileRecord] = Field(default_factory=list)
    code_of_conduct_files: list[FileRecord] = Field(default_factory=list)

    @property
    def folder_name(self) -> str:
        return self.project_dir.name

    @property
    def is_initialized(self) -> bool:
        """True when a package.json or go.mod was found."""
        return self.manifest is not None or self.go_module is not None

    @property
    def manifest_scripts(self) -> dict[str, Any]:
        if not self.manifest:
            return {}
        scripts = self.manifest.get("scripts")
        return scripts if isinstance(scripts, dict) else {}


class Resolution(BaseModel):
    """Outcome of the interview: the delta plus the fresh/reinitialize flag."""

    delta: ConfigDelta
    fresh: bool = True

    def language(self, probed: ProbedState) -> Language:
        language = self.delta.effective("language", probed)
        if language is None:
            raise ValueError("language was neither probed nor answered")
        return Language(language)

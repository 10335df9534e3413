"""
Configuration data models for pkg-cmd.

These models define the structure of .pkg-cmd.json and
~/.config/pkg-cmd/config.json files, with validation and type safety
via Pydantic.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

GITIGNORE_URL = "https://raw.githubusercontent.com/github/gitignore/main/{template}.gitignore"
CODE_OF_CONDUCT_URL = (
    "https://www.contributor-covenant.org/version/2/1/code_of_conduct/code_of_conduct.md"
)
LICENSE_TEXT_URL = (
    "https://raw.githubusercontent.com/spdx/license-list-data/main/text/{license_id}.txt"
)


class SourcesConfig(BaseModel):
    """
    Remote locations for the templates written during ``pkg-cmd init``.

    URL templates are formatted with ``str.format``: ``gitignore`` receives
    ``{template}`` (``Node`` or ``Go``) and ``license_text`` receives
    ``{license_id}`` (an SPDX identifier).
    """
    gitignore: str = Field(
        default=GITIGNORE_URL,
        description="URL template for the language .gitignore"
    )
    code_of_conduct: str = Field(
        default=CODE_OF_CONDUCT_URL,
        description="URL of the Contributor Covenant text"
    )
    license_text: str = Field(
        default=LICENSE_TEXT_URL,
        description="URL template for canonical license texts"
    )

    @field_validator("gitignore")
    @classmethod
    def validate_gitignore(cls, v: str) -> str:
        if "{template}" not in v:
            raise ValueError("gitignore URL must contain a {template} placeholder")
        return v

    @field_validator("license_text")
    @classmethod
    def validate_license_text(cls, v: str) -> str:
        if "{license_id}" not in v:
            raise ValueError("license_text URL must contain a {license_id} placeholder")
        return v


class HttpConfig(BaseModel):
    """Network settings for template downloads."""
    timeout: Optional[float] = Field(
        default=None,
        ge=0.0,
        description="Seconds before a download is abandoned (None waits indefinitely)"
    )


class PkgCmdConfig(BaseModel):
    """
    Top-level pkg-cmd configuration.

    Loaded from defaults, user config, project config, and env vars.

    Example:
        >>> config = PkgCmdConfig(default_license="Apache-2.0")
        >>> config.manifest_scripts["format"]
        'pkg-cmd format .'
    """
    command_name: str = Field(
        default="pkg-cmd",
        min_length=1,
        description="Executable name written into manifest scripts and hooks"
    )
    default_license: str = Field(
        default="MIT",
        min_length=1,
        description="License offered when the project does not declare one"
    )
    sources: SourcesConfig = Field(
        default_factory=SourcesConfig,
        description="Remote template locations"
    )
    http: HttpConfig = Field(
        default_factory=HttpConfig,
        description="Network settings"
    )

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields for forward compatibility
        validate_assignment=True,
    )

    @field_validator("http", mode="before")
    @classmethod
    def validate_http(cls, v: Union[int, float, dict[str, Any], HttpConfig]) -> Any:
        """Accept a bare number as the timeout."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return {"timeout": v}
        return v

    @property
    def manifest_scripts(self) -> dict[str, str]:
        """Script name -> invocation for the scripts registered in package.json."""
        return {
            "lint": f"{self.command_name} lint",
            "test": f"{self.command_name} test",
            "format": f"{self.command_name} format .",
            "release": f"{self.command_name} release",
        }

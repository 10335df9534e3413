"""
Project state detection.

Reads the files that tell the wizard what kind of project it is looking
at (package.json or go.mod), which readme/license/code-of-conduct files
already exist, and whether git is configured. Missing files are never
errors; only a contradictory or unreadable project manifest is.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pkg_cmd.core.init.exceptions import ConflictingProjectTypeError, InvalidManifestError
from pkg_cmd.core.init.gomod import parse_go_mod
from pkg_cmd.core.init.models import FileRecord, Language, ProbedState, ProbeResult
from pkg_cmd.utils.git import get_git_config_path, get_origin_url

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"
GO_MOD_FILE = "go.mod"

README_FILE_NAMES = [
    "README.md",
    "README.txt",
    "README",
    "Readme.md",
    "Readme.txt",
    "Readme",
    "readme.md",
    "readme.txt",
    "readme",
]

LICENSE_FILE_NAMES = [
    "LICENSE",
    "LICENSE.txt",
    "LICENSE.md",
    "License",
    "License.txt",
    "License.md",
    "license",
    "license.txt",
    "license.md",
]

CODE_OF_CONDUCT_FILE_NAMES = [
    "CODE_OF_CONDUCT.md",
    "CODE_OF_CONDUCT.txt",
    "CODE_OF_CONDUCT",
    "Code_Of_Conduct.md",
    "Code_Of_Conduct.txt",
    "Code_Of_Conduct",
    "code_of_conduct.md",
    "code_of_conduct.txt",
    "code_of_conduct",
]


def read_optional(project_dir: Path, name: str) -> str | None:
    """Return the text of ``project_dir/name``, or None if absent or empty."""
    path = project_dir / name
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping %s: %s", path, e)
        return None
    return content or None


def read_candidates(project_dir: Path, names: list[str]) -> list[FileRecord]:
    """
    Read every existing file among ``names``, in list order.

    On case-insensitive filesystems several spellings point at the same
    file; each physical file is reported once under the first spelling.
    """
    records: list[FileRecord] = []
    seen: set[tuple[int, int]] = set()
    for name in names:
        content = read_optional(project_dir, name)
        if content is None:
            continue
        try:
            stat = (project_dir / name).stat()
            identity = (stat.st_dev, stat.st_ino)
        except OSError:
            identity = None
        if identity is not None:
            if identity in seen:
                continue
            seen.add(identity)
        records.append(FileRecord(path=name, content=content))
    return records


def _string_field(manifest: dict[str, Any], key: str) -> str | None:
    value = manifest.get(key)
    return value if isinstance(value, str) and value else None


def parse_manifest(text: str) -> dict[str, Any]:
    """Parse package.json text, raising InvalidManifestError if it is not an object."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidManifestError(MANIFEST_FILE, str(e)) from e
    if not isinstance(data, dict):
        raise InvalidManifestError(MANIFEST_FILE, "top level is not an object")
    return data


def probe_project(project_dir: Path) -> ProbeResult:
    """
    Inspect ``project_dir`` and classify the existing project.

    Args:
        project_dir: Directory being initialized

    Returns:
        ProbeResult with the probed state and existing file records

    Raises:
        ConflictingProjectTypeError: Both package.json and go.mod exist
        InvalidManifestError: package.json is not valid JSON
    """
    project_dir = Path(project_dir)
    manifest_text = read_optional(project_dir, MANIFEST_FILE)
    go_mod_text = read_optional(project_dir, GO_MOD_FILE)

    if manifest_text is not None and go_mod_text is not None:
        raise ConflictingProjectTypeError()

    git_config = get_git_config_path(project_dir)
    has_git = git_config.is_file()
    state: dict[str, Any] = {
        "has_git": has_git,
        "git_remote": get_origin_url(git_config) if has_git else None,
    }

    manifest = None
    go_module = None
    if manifest_text is not None:
        manifest = parse_manifest(manifest_text)
        state.update(
            language=Language.NODE,
            name=_string_field(manifest, "name"),
            description=_string_field(manifest, "description"),
            author=_string_field(manifest, "author"),
            license=_string_field(manifest, "license"),
        )
    elif go_mod_text is not None:
        go_module = parse_go_mod(go_mod_text)
        state.update(language=Language.GO, name=go_module.module or None)

    result = ProbeResult(
        project_dir=project_dir,
        state=ProbedState(**state),
        manifest=manifest,
        go_module=go_module,
        readme_files=read_candidates(project_dir, README_FILE_NAMES),
        license_files=read_candidates(project_dir, LICENSE_FILE_NAMES),
        code_of_conduct_files=read_candidates(project_dir, CODE_OF_CONDUCT_FILE_NAMES),
    )
    logger.debug(
        "Probed %s: language=%s git=%s readme=%d license=%d coc=%d",
        project_dir,
        result.state.language,
        has_git,
        len(result.readme_files),
        len(result.license_files),
        len(result.code_of_conduct_files),
    )
    return result

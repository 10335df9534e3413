"""
Turn the interview result into an ordered list of tasks.

A plan is a tuple of top-level groups (Git, License, Code of Conduct,
package.json, Tooling, Pre-commit linting, Go module, README), each
holding the steps that still need to happen. A group or step whose
precondition does not hold is left out of the plan entirely; nothing in
the plan is a placeholder.

Step actions are closures over an Effects instance and only touch the
project when the runner calls them.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from datetime import date

from pkg_cmd.core.config.models import PkgCmdConfig
from pkg_cmd.core.init.effects import Effects
from pkg_cmd.core.init.gomod import module_path_from_remote
from pkg_cmd.core.init.licenses import (
    fetch_license_text,
    fill_license_placeholders,
    license_display_name,
    license_matches,
)
from pkg_cmd.core.init.models import FileRecord, Language, ProbeResult, Resolution
from pkg_cmd.core.init.readme import ReadmeContext, render_readme
from pkg_cmd.core.init.templates import (
    LINT_STAGED_FILE,
    TOOLING_FILES,
    render_lint_staged_config,
)

logger = logging.getLogger(__name__)

MANIFEST_FIELDS = ("name", "description", "author", "license")


@dataclass(frozen=True)
class Task:
    """A titled step, or a group of steps when ``subtasks`` is non-empty."""

    title: str
    action: Callable[[], None] | None = None
    subtasks: tuple[Task, ...] = ()

    @property
    def is_group(self) -> bool:
        return bool(self.subtasks)


@dataclass(frozen=True)
class Plan:
    """Top-level tasks in execution order."""

    tasks: tuple[Task, ...]

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    def group(self, title: str) -> Task | None:
        return next((task for task in self.tasks if task.title == title), None)

    @property
    def titles(self) -> list[str]:
        return [task.title for task in self.tasks]


def compact(steps: Iterable[tuple[bool, Task]]) -> tuple[Task, ...]:
    """Keep the tasks whose condition is true, preserving order."""
    return tuple(task for condition, task in steps if condition)


@dataclass(frozen=True)
class _Context:
    probe: ProbeResult
    resolution: Resolution
    effects: Effects
    config: PkgCmdConfig
    language: Language
    year: int

    def value(self, field: str) -> str:
        """Resolved value of a text field, or "" when neither side has one."""
        value = self.resolution.delta.effective(field, self.probe.state)
        return value if value is not None else ""


# ---------------------------------------------------------------------------
# Shared step builders
# ---------------------------------------------------------------------------


def _command(ctx: _Context, *args: str) -> Callable[[], None]:
    def action() -> None:
        ctx.effects.run(list(args))

    return action


def _npm_set(ctx: _Context, *assignments: str) -> Callable[[], None]:
    def action() -> None:
        for assignment in assignments:
            ctx.effects.run(["npm", "pkg", "set", assignment])

    return action


def _cleanup_step(ctx: _Context, title: str, files: list[FileRecord]) -> tuple[bool, Task]:
    paths = [record.path for record in files]
    return (
        bool(files),
        Task(title=title, action=lambda: ctx.effects.remove_quietly(paths)),
    )


def _new(files: list[FileRecord]) -> str:
    return "new " if files else ""


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------


def _git_group(ctx: _Context) -> Task:
    effects = ctx.effects
    remote = ctx.resolution.delta.git_remote
    gitignore_url = ctx.config.sources.gitignore.format(
        template=ctx.language.gitignore_template
    )

    def create_gitignore() -> None:
        effects.write_file(".gitignore", effects.fetch_text(gitignore_url))

    return Task(
        title="Git",
        subtasks=compact([
            (True, Task("Initialize git repository", _command(ctx, "git", "init"))),
            (True, Task("Create .gitignore", create_gitignore)),
            (
                bool(remote),
                Task(
                    "Add git remote",
                    _command(ctx, "git", "remote", "add", "origin", str(remote)),
                ),
            ),
        ]),
    )


def _license_needed(ctx: _Context) -> bool:
    license_id = ctx.resolution.delta.license
    if not license_id:
        return False
    files = ctx.probe.license_files
    current = files[0].content if files else ""
    return not license_matches(current, license_id)


def _license_group(ctx: _Context) -> Task:
    effects = ctx.effects
    files = ctx.probe.license_files
    license_id = str(ctx.resolution.delta.license)

    def create_license() -> None:
        text = fetch_license_text(effects, ctx.config.sources, license_id)
        effects.write_file(
            "LICENSE",
            fill_license_placeholders(
                text,
                author=ctx.value("author"),
                license_id=license_id,
                name=ctx.value("name"),
                year=ctx.year,
            ),
        )

    return Task(
        title="License",
        subtasks=compact([
            _cleanup_step(ctx, "Clean up previous LICENSE file", files),
            (True, Task(f"Create {_new(files)}LICENSE file", create_license)),
        ]),
    )


def _code_of_conduct_group(ctx: _Context) -> Task:
    effects = ctx.effects
    files = ctx.probe.code_of_conduct_files
    url = ctx.config.sources.code_of_conduct

    def create_code_of_conduct() -> None:
        effects.write_file("CODE_OF_CONDUCT.md", effects.fetch_text(url))

    return Task(
        title="Code of Conduct",
        subtasks=compact([
            _cleanup_step(ctx, "Clean up previous CODE_OF_CONDUCT.md file", files),
            (True, Task(f"Create {_new(files)}CODE_OF_CONDUCT.md file", create_code_of_conduct)),
        ]),
    )


def _manifest_group(ctx: _Context) -> Task:
    effects = ctx.effects
    delta = ctx.resolution.delta
    probed = ctx.probe.state
    existing_scripts = ctx.probe.manifest_scripts

    def create_manifest() -> None:
        effects.write_file("package.json", json.dumps({"name": ctx.value("name")}, indent=2) + "\n")

    steps: list[tuple[bool, Task]] = [
        (ctx.probe.manifest is None, Task("Create package.json file", create_manifest)),
    ]

    for field in MANIFEST_FIELDS:
        value = getattr(delta, field)
        steps.append((
            bool(value) and value != getattr(probed, field),
            Task(f"Update package.json {field}", _npm_set(ctx, f"{field}={value}")),
        ))

    remote = delta.git_remote
    steps.append((
        bool(remote) and remote != probed.git_remote,
        Task(
            "Update package.json repository",
            _npm_set(ctx, "repository.type=git", f"repository.url={remote}"),
        ),
    ))

    for script, invocation in ctx.config.manifest_scripts.items():
        steps.append((
            not existing_scripts.get(script),
            Task(f"Set {script} script", _npm_set(ctx, f"scripts.{script}={invocation}")),
        ))

    return Task(title="package.json", subtasks=compact(steps))


def _tooling_group(ctx: _Context) -> Task:
    effects = ctx.effects

    def writer(name: str, content: str) -> Callable[[], None]:
        def action() -> None:
            effects.write_file(name, content)

        return action

    return Task(
        title="Tooling",
        subtasks=tuple(
            Task(title, writer(name, content)) for title, name, content in TOOLING_FILES
        ),
    )


def _pre_commit_group(ctx: _Context) -> Task:
    effects = ctx.effects

    def install_hooks() -> None:
        effects.run(["npx", "husky", "install"])
        effects.run(["npm", "pkg", "set", "scripts.prepare=husky install"])
        effects.run(["npx", "husky", "add", ".husky/pre-commit", "npx lint-staged"])

    def configure_lint_staged() -> None:
        effects.write_file(LINT_STAGED_FILE, render_lint_staged_config(ctx.config.command_name))

    return Task(
        title="Pre-commit linting",
        subtasks=(
            Task("Install dependencies", install_hooks),
            Task("Configure lint-staged", configure_lint_staged),
        ),
    )


def _go_module_task(ctx: _Context, remote: str) -> Task:
    module_path = module_path_from_remote(remote)
    return Task("Initialize go module", _command(ctx, "go", "mod", "init", module_path))


def _readme_group(ctx: _Context) -> Task:
    effects = ctx.effects
    files = ctx.probe.readme_files
    context = ReadmeContext(
        name=ctx.value("name"),
        description=ctx.value("description"),
        license_name=license_display_name(ctx.value("license")),
        badges=[],
    )

    def create_readme() -> None:
        effects.write_file("README.md", render_readme(ctx.language, context))

    return Task(
        title="README",
        subtasks=compact([
            _cleanup_step(ctx, "Clean up current README", files),
            (True, Task(f"Create {_new(files)}README file", create_readme)),
        ]),
    )


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------


def build_plan(
    probe: ProbeResult,
    resolution: Resolution,
    effects: Effects,
    config: PkgCmdConfig,
    *,
    today: date | None = None,
) -> Plan:
    """
    Build the ordered plan for applying ``resolution`` to the probed project.

    Args:
        probe: What was found on disk
        resolution: Interview answers and fresh/reinitialize flag
        effects: Side-effect handle the step actions will use
        config: Tool configuration (template URLs, script invocations)
        today: Date used for license years (defaults to today)

    Returns:
        Plan whose groups contain only the steps that need to run
    """
    delta = resolution.delta
    ctx = _Context(
        probe=probe,
        resolution=resolution,
        effects=effects,
        config=config,
        language=resolution.language(probe.state),
        year=(today or date.today()).year,
    )
    is_node = ctx.language is Language.NODE
    remote = delta.effective("git_remote", probe.state)

    tasks: list[Task] = []
    if delta.initialize_git:
        tasks.append(_git_group(ctx))
    if _license_needed(ctx):
        tasks.append(_license_group(ctx))
    if delta.add_code_of_conduct:
        tasks.append(_code_of_conduct_group(ctx))
    if is_node:
        manifest = _manifest_group(ctx)
        if manifest.subtasks:
            tasks.append(manifest)
    if is_node and resolution.fresh:
        tasks.append(_tooling_group(ctx))
    if is_node and delta.add_pre_commit_linting:
        tasks.append(_pre_commit_group(ctx))
    if ctx.language is Language.GO and resolution.fresh and remote:
        tasks.append(_go_module_task(ctx, remote))
    if delta.add_readme:
        tasks.append(_readme_group(ctx))

    logger.debug("Planned groups: %s", [task.title for task in tasks])
    return Plan(tasks=tuple(tasks))

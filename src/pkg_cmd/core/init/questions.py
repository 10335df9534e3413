"""
The init interview.

The interview is an ordered list of steps. Each step is either a
Question (asked only when its ``applies`` predicate holds, with a message
and default computed from the probe and earlier answers) or a Guard that
aborts the run when the project cannot be initialized as requested.
``resolve`` walks the list once, in order, and returns the resulting
ConfigDelta. Input comes from a Prompter so the interview can be driven
by scripted answers in tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

import click
import typer
from rich.columns import Columns
from rich.console import Console

from pkg_cmd.core.init.exceptions import (
    GoRequiresGitError,
    GoRequiresGitInitError,
    InitCancelled,
    InitError,
)
from pkg_cmd.core.init.licenses import license_ids
from pkg_cmd.core.init.models import ConfigDelta, Language, ProbeResult, Resolution

logger = logging.getLogger(__name__)

LANGUAGE_CHOICES = ["Node", "Go"]


class Prompter(Protocol):
    """Source of answers for the interview."""

    def confirm(self, message: str, default: bool) -> bool: ...

    def text(self, message: str, default: str | None) -> str: ...

    def select(self, message: str, choices: list[str], default: str | None) -> str: ...


class ConsolePrompter:
    """Prompter that asks the operator on the terminal."""

    # Longer choice lists are printed in columns instead of inline
    INLINE_CHOICES = 8

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def confirm(self, message: str, default: bool) -> bool:
        return typer.confirm(message, default=default)

    def text(self, message: str, default: str | None) -> str:
        if default:
            return str(typer.prompt(message, default=default))
        return str(typer.prompt(message, default="", show_default=False))

    def select(self, message: str, choices: list[str], default: str | None) -> str:
        inline = len(choices) <= self.INLINE_CHOICES
        if not inline:
            self.console.print(Columns(choices, equal=True, expand=False))
        answer = typer.prompt(
            message,
            type=click.Choice(choices, case_sensitive=False),
            default=default,
            show_choices=inline,
        )
        return str(answer)


class QuestionKind(str, Enum):
    CONFIRM = "confirm"
    TEXT = "text"
    SELECT = "select"


@dataclass
class Session:
    """Mutable interview state shared by the step predicates."""

    probe: ProbeResult
    reinitialize: bool
    default_license: str
    licenses: list[str]
    delta: ConfigDelta = field(default_factory=ConfigDelta)
    fresh: bool = True

    @property
    def language(self) -> Language | None:
        return self.delta.language or self.probe.state.language

    @property
    def has_git(self) -> bool:
        return self.probe.state.has_git


@dataclass(frozen=True)
class Question:
    """
    One interview question.

    Attributes:
        id: ConfigDelta field the answer is stored in
        kind: How the question is asked
        message: Builds the prompt text
        default: Builds the default answer
        applies: Whether the question is asked at all
        choices: Options for SELECT questions
        record: Stores the answer; defaults to setting ``delta.<id>``
    """

    id: str
    kind: QuestionKind
    message: Callable[[Session], str]
    default: Callable[[Session], Any] = lambda session: None
    applies: Callable[[Session], bool] = lambda session: True
    choices: Callable[[Session], list[str]] | None = None
    record: Callable[[Session, Any], None] | None = None

    def __post_init__(self) -> None:
        if self.kind is QuestionKind.SELECT and self.choices is None:
            raise ValueError(f"SELECT question {self.id!r} needs choices")

    def ask(self, session: Session, prompter: Prompter) -> Any:
        message = self.message(session)
        default = self.default(session)
        if self.kind is QuestionKind.CONFIRM:
            return prompter.confirm(message, bool(default))
        if self.kind is QuestionKind.SELECT:
            choices = self.choices(session) if self.choices else []
            return prompter.select(message, choices, default)
        return prompter.text(message, default)


@dataclass(frozen=True)
class Guard:
    """Aborts the interview with ``error()`` when ``fails`` holds."""

    id: str
    fails: Callable[[Session], bool]
    error: Callable[[], InitError]


Step = Question | Guard


# ---------------------------------------------------------------------------
# Answer recorders
# ---------------------------------------------------------------------------


def _record_language(session: Session, answer: str) -> None:
    session.delta.language = Language(answer.lower())


def _record_reinitialize(session: Session, answer: bool) -> None:
    if not answer:
        raise InitCancelled()


def _record_initialize_git(session: Session, answer: bool) -> None:
    session.delta.initialize_git = answer
    if session.fresh and not answer and session.delta.language is Language.GO:
        raise GoRequiresGitInitError()


# ---------------------------------------------------------------------------
# Messages and defaults
# ---------------------------------------------------------------------------


def _reinitialize_message(session: Session) -> str:
    manifest = "package.json" if session.probe.manifest is not None else "go.mod"
    return (
        "Looks like this project is already initialized.\n\n"
        f"We will update the {manifest} with any new details and overwrite "
        "your license file and code of conduct.\n\n"
        "Do you want to continue?"
    )


def _license_default(session: Session) -> str:
    probed = session.probe.state.license
    if probed and probed in session.licenses:
        return probed
    if session.default_license in session.licenses:
        return session.default_license
    return session.licenses[0]


def _replace_or_add(count: int) -> str:
    return "replace" if count > 0 else "add"


STEPS: list[Step] = [
    Question(
        id="language",
        kind=QuestionKind.SELECT,
        message=lambda s: "What language are you using?",
        choices=lambda s: LANGUAGE_CHOICES,
        applies=lambda s: not s.probe.is_initialized,
        record=_record_language,
    ),
    Question(
        id="reinitialize",
        kind=QuestionKind.CONFIRM,
        message=_reinitialize_message,
        default=lambda s: False,
        applies=lambda s: s.probe.is_initialized and not s.reinitialize,
        record=_record_reinitialize,
    ),
    Guard(
        id="go_requires_git",
        fails=lambda s: s.probe.state.language is Language.GO and not s.has_git,
        error=GoRequiresGitError,
    ),
    Question(
        id="initialize_git",
        kind=QuestionKind.CONFIRM,
        message=lambda s: "Do you want to initialize a git repo?",
        default=lambda s: True,
        applies=lambda s: not s.has_git,
        record=_record_initialize_git,
    ),
    Question(
        id="git_remote",
        kind=QuestionKind.TEXT,
        message=lambda s: "What is the git remote URL?",
        applies=lambda s: bool(s.delta.initialize_git) or not s.probe.state.git_remote,
    ),
    Question(
        id="add_pre_commit_linting",
        kind=QuestionKind.CONFIRM,
        message=lambda s: "Do you want to automatically lint your files before every commit?",
        default=lambda s: True,
        applies=lambda s: bool(s.delta.initialize_git) and s.language is Language.NODE,
    ),
    Question(
        id="name",
        kind=QuestionKind.TEXT,
        message=lambda s: "What is the name of your project?",
        default=lambda s: s.probe.state.name or s.probe.folder_name,
    ),
    Question(
        id="description",
        kind=QuestionKind.TEXT,
        message=lambda s: "What is the description of your project?",
        default=lambda s: s.probe.state.description,
    ),
    Question(
        id="author",
        kind=QuestionKind.TEXT,
        message=lambda s: "What is the author of your project?",
        default=lambda s: s.probe.state.author,
    ),
    Question(
        id="license",
        kind=QuestionKind.SELECT,
        message=lambda s: "What license are you using?",
        choices=lambda s: s.licenses,
        default=_license_default,
    ),
    Question(
        id="add_code_of_conduct",
        kind=QuestionKind.CONFIRM,
        message=lambda s: (
            f"Do you want to {_replace_or_add(len(s.probe.code_of_conduct_files))} "
            "the Contributor Covenant Code of Conduct?"
        ),
        default=lambda s: len(s.probe.code_of_conduct_files) == 0,
    ),
    Question(
        id="add_readme",
        kind=QuestionKind.CONFIRM,
        message=lambda s: (
            f"Do you want to {_replace_or_add(len(s.probe.readme_files))} the README.md file?"
        ),
        default=lambda s: len(s.probe.readme_files) == 0,
    ),
]


def resolve(
    probe: ProbeResult,
    prompter: Prompter,
    *,
    reinitialize: bool = False,
    default_license: str = "MIT",
    licenses: list[str] | None = None,
    steps: list[Step] | None = None,
) -> Resolution:
    """
    Run the interview and return the operator's decisions.

    Args:
        probe: Result of probing the project directory
        prompter: Where answers come from
        reinitialize: Skip the "already initialized" confirmation
        default_license: License offered when the project declares none
        licenses: Identifiers offered for the license question
        steps: Interview steps (defaults to STEPS)

    Returns:
        Resolution with the ConfigDelta and the fresh/reinitialize flag

    Raises:
        InitCancelled: The operator declined to reinitialize
        GoRequiresGitError: Existing Go module without a git repository
        GoRequiresGitInitError: New Go project and git init was declined
    """
    session = Session(
        probe=probe,
        reinitialize=reinitialize,
        default_license=default_license,
        licenses=licenses if licenses is not None else license_ids(),
        fresh=not probe.is_initialized,
    )

    for step in steps if steps is not None else STEPS:
        if isinstance(step, Guard):
            if step.fails(session):
                raise step.error()
            continue

        if not step.applies(session):
            continue

        answer = step.ask(session, prompter)
        logger.debug("Answer %s=%r", step.id, answer)
        if step.record is not None:
            step.record(session, answer)
        else:
            setattr(session.delta, step.id, answer)

    return Resolution(delta=session.delta, fresh=session.fresh)
